"""
Use-case: retrieve country information by the name of its capital.
Depends only on Domain ports and entities, no infrastructure imports.
Results are never cached.
"""

import asyncio
from typing import Any, Optional

from country_services.application.use_cases.cancellation import run_cancellable
from country_services.application.use_cases.lookup_key import normalize_capital
from country_services.domain.entities.country import CountryInfo
from country_services.domain.ports.country_data_port import ICountryDataProvider


class GetCountryInfoByCapitalUseCase:
    def __init__(self, provider: ICountryDataProvider) -> None:
        self._provider = provider

    def execute(self, capital: Any) -> CountryInfo:
        """Fetch the country whose capital is *capital* (whitespace-stripped).

        Raises:
            InvalidArgumentError: if *capital* is None, blank or rejected.
            Any CountryServiceError propagated from the ICountryDataProvider.
        """
        return self._provider.fetch_country_info(normalize_capital(capital))

    async def execute_async(
        self,
        capital: Any,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> CountryInfo:
        key = normalize_capital(capital)
        return await run_cancellable(
            lambda: self._provider.fetch_country_info_async(key),
            cancel_event,
        )
