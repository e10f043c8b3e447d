"""
Use-case: retrieve the local currency of a country by its ISO 3166-1 code.
Depends only on Domain ports and entities, no infrastructure imports.

Successful results are registered in the optional ICurrencyCache under the
normalized code; a live cached record short-circuits the provider.
"""

import asyncio
import logging
from typing import Any, Optional

from country_services.application.use_cases.cancellation import raise_if_cancelled, run_cancellable
from country_services.application.use_cases.lookup_key import normalize_country_code
from country_services.domain.entities.country import LocalCurrency
from country_services.domain.ports.country_data_port import ICountryDataProvider
from country_services.domain.ports.currency_cache_port import ICurrencyCache

logger = logging.getLogger(__name__)


class GetLocalCurrencyUseCase:
    def __init__(
        self,
        provider: ICountryDataProvider,
        cache: Optional[ICurrencyCache] = None,
    ) -> None:
        self._provider = provider
        self._cache = cache

    def execute(self, code: Any) -> LocalCurrency:
        """Look up the currency for *code* (2 or 3 letters, case-insensitive).

        Raises:
            InvalidArgumentError: if *code* is None, blank or rejected.
            Any CountryServiceError propagated from the ICountryDataProvider.
        """
        key = normalize_country_code(code)
        cached = self._lookup_cache(key)
        if cached is not None:
            return cached
        currency = self._provider.fetch_local_currency(key)
        self._store(key, currency)
        return currency

    async def execute_async(
        self,
        code: Any,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> LocalCurrency:
        """Asynchronous counterpart of execute().

        Raises:
            InvalidArgumentError: if *code* is None, blank or rejected.
            LookupCancelledError: if *cancel_event* is set before the lookup completes.
            Any CountryServiceError propagated from the ICountryDataProvider.
        """
        key = normalize_country_code(code)
        raise_if_cancelled(cancel_event)
        cached = self._lookup_cache(key)
        if cached is not None:
            return cached
        currency = await run_cancellable(
            lambda: self._provider.fetch_local_currency_async(key),
            cancel_event,
        )
        self._store(key, currency)
        return currency

    def invalidate(self, code: Any = None) -> None:
        """Drop the cached record for *code*, or every record when *code* is None."""
        if self._cache is None:
            return
        if code is None:
            self._cache.clear()
        else:
            self._cache.discard(normalize_country_code(code))

    def _lookup_cache(self, key: str) -> Optional[LocalCurrency]:
        if self._cache is None:
            return None
        cached = self._cache.get(key)
        if cached is None:
            logger.debug("Currency cache miss for %s", key)
        else:
            logger.debug("Currency cache hit for %s", key)
        return cached

    def _store(self, key: str, currency: LocalCurrency) -> None:
        if self._cache is not None:
            self._cache.put(key, currency)
