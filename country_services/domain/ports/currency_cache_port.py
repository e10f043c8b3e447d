"""
Port (interface) for currency caches.
Infrastructure adapters (e.g. WeakCurrencyCache) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from country_services.domain.entities.country import LocalCurrency


class ICurrencyCache(ABC):
    @abstractmethod
    def get(self, code: str) -> Optional[LocalCurrency]:
        """Return the cached record for *code*, or None on a miss.

        A key whose record has been reclaimed must behave as a miss.
        """
        ...

    @abstractmethod
    def put(self, code: str, currency: LocalCurrency) -> None:
        """Register *currency* under *code*, replacing any previous entry."""
        ...

    @abstractmethod
    def discard(self, code: str) -> None:
        """Drop the entry for *code* if there is one."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""
        ...
