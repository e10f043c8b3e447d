"""
Domain entities for country metadata returned by the REST Countries API.
Zero external dependencies, pure Python dataclasses only.

Both records are frozen and compare by value. LocalCurrency must stay
weak-referenceable (no __slots__) because the currency cache only holds
weak references to it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocalCurrency:
    country_name: str
    currency_code: str
    currency_symbol: str


@dataclass(frozen=True)
class CountryInfo:
    name: str
    capital_name: str
    area: float
    population: int
    flag: str
