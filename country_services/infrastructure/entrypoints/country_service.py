"""
Composition Root and public facade of the library.

CountryService wires the RestCountriesProvider, the optional WeakCurrencyCache
and the two application use-cases, and exposes the four lookup operations
(blocking and asynchronous, by country code and by capital).

Usage:
    with CountryService("https://restcountries.com/v2") as service:
        currency = service.get_local_currency_by_code("US")

    async with create_country_service() as service:
        info = await service.get_country_info_by_capital_async("Minsk")
"""

import asyncio
from typing import Any, Optional

import httpx
from dotenv import load_dotenv

from country_services.application.use_cases.get_country_info import GetCountryInfoByCapitalUseCase
from country_services.application.use_cases.get_local_currency import GetLocalCurrencyUseCase
from country_services.domain.entities.country import CountryInfo, LocalCurrency
from country_services.infrastructure.cache.weak_currency_cache import WeakCurrencyCache
from country_services.infrastructure.config import CountryServiceSettings
from country_services.infrastructure.rest_countries.rest_countries_adapter import (
    DEFAULT_SERVICE_URL,
    DEFAULT_TIMEOUT,
    RestCountriesProvider,
)


class CountryService:
    """Looks up local currencies and country information from the REST Countries API."""

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        cache_enabled: bool = True,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            service_url:   API root. Reachability is not checked here.
            timeout:       Request timeout in seconds for clients created by the service.
            cache_enabled: Keep weak references to fetched currencies, keyed by code.
            client:        Optional httpx.Client to share; the caller keeps ownership.
            async_client:  Optional httpx.AsyncClient to share; the caller keeps ownership.
        """
        self._provider = RestCountriesProvider(
            service_url=service_url,
            timeout=timeout,
            client=client,
            async_client=async_client,
        )
        self._cache = WeakCurrencyCache() if cache_enabled else None
        self._currency_uc = GetLocalCurrencyUseCase(self._provider, self._cache)
        self._country_info_uc = GetCountryInfoByCapitalUseCase(self._provider)

    @classmethod
    def from_settings(cls, settings: CountryServiceSettings, **kwargs: Any) -> "CountryService":
        return cls(
            settings.service_url,
            timeout=settings.timeout,
            cache_enabled=settings.cache_enabled,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_local_currency_by_code(self, alpha2_or_3_code: Optional[str]) -> LocalCurrency:
        """Get the local currency of a country by its ISO 3166-1 alpha-2 or alpha-3 code.

        Raises:
            InvalidArgumentError:   code is None, blank, or otherwise invalid.
            CountryNotFoundError:   the API does not know the code.
            RemoteUnavailableError: the API could not be reached.
            MalformedResponseError: the API answered with an unexpected body.
            UnknownLookupError:     any other failure.
        """
        return self._currency_uc.execute(alpha2_or_3_code)

    async def get_local_currency_by_code_async(
        self,
        alpha2_or_3_code: Optional[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> LocalCurrency:
        """Asynchronous get_local_currency_by_code().

        Setting *cancel_event* before the exchange completes raises
        LookupCancelledError.
        """
        return await self._currency_uc.execute_async(alpha2_or_3_code, cancel_event)

    def get_country_info_by_capital(self, capital: Optional[str]) -> CountryInfo:
        """Get information about a country by the name of its capital.

        Raises the same errors as get_local_currency_by_code().
        """
        return self._country_info_uc.execute(capital)

    async def get_country_info_by_capital_async(
        self,
        capital: Optional[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> CountryInfo:
        return await self._country_info_uc.execute_async(capital, cancel_event)

    # ------------------------------------------------------------------
    # Cache and lifecycle
    # ------------------------------------------------------------------

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    def clear_cache(self, code: Optional[str] = None) -> None:
        """Forget the cached currency for *code*, or all of them when *code* is None.

        A no-op when caching is disabled. *code* is validated and normalized
        like a lookup key, so clear_cache(" us ") drops the "US" entry.
        """
        self._currency_uc.invalidate(code)

    def close(self) -> None:
        self._provider.close()

    async def aclose(self) -> None:
        await self._provider.aclose()

    def __enter__(self) -> "CountryService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "CountryService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def create_country_service(**kwargs: Any) -> CountryService:
    """Build a CountryService from COUNTRY_SERVICE_* variables (a .env file is honoured).

    Keyword arguments are forwarded to the constructor, e.g. a shared httpx client.
    """
    load_dotenv()
    return CountryService.from_settings(CountryServiceSettings.from_env(), **kwargs)
