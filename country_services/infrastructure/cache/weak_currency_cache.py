"""
Infrastructure adapter: weakref.WeakValueDictionary -> ICurrencyCache.

The cache holds no strong reference to a LocalCurrency. Once every caller has
dropped a record the interpreter reclaims it and its key vanishes from the
mapping, so a later lookup is a miss. There is no size bound and no TTL.
"""

import threading
import weakref
from typing import Optional

from country_services.domain.entities.country import LocalCurrency
from country_services.domain.ports.currency_cache_port import ICurrencyCache


class WeakCurrencyCache(ICurrencyCache):
    """Country-code keyed cache of weakly referenced LocalCurrency records."""

    def __init__(self) -> None:
        self._entries: "weakref.WeakValueDictionary[str, LocalCurrency]" = weakref.WeakValueDictionary()
        self._lock = threading.Lock()

    def get(self, code: str) -> Optional[LocalCurrency]:
        with self._lock:
            return self._entries.get(code)

    def put(self, code: str, currency: LocalCurrency) -> None:
        with self._lock:
            self._entries[code] = currency

    def discard(self, code: str) -> None:
        with self._lock:
            self._entries.pop(code, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
