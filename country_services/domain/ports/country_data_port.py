"""
Port (interface) for country data providers.
Infrastructure adapters (e.g. RestCountriesProvider) must implement this interface.

Implementations receive keys that are already validated and normalized by the
application layer; they only fetch and map.
"""

from abc import ABC, abstractmethod

from country_services.domain.entities.country import CountryInfo, LocalCurrency


class ICountryDataProvider(ABC):
    @abstractmethod
    def fetch_local_currency(self, code: str) -> LocalCurrency: ...

    @abstractmethod
    async def fetch_local_currency_async(self, code: str) -> LocalCurrency: ...

    @abstractmethod
    def fetch_country_info(self, capital: str) -> CountryInfo: ...

    @abstractmethod
    async def fetch_country_info_async(self, capital: str) -> CountryInfo: ...
