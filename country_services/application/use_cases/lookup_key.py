"""
Validation and normalization of lookup keys.
Depends only on Domain exceptions, no infrastructure imports.

Keys are checked here, before any use-case touches a cache or a provider, so
invalid input never results in a request.
"""

from typing import Any

from country_services.domain.exceptions import InvalidArgumentError

# Literal keys that are always rejected, compared after stripping.
REJECTED_KEYS = frozenset({"UPSS"})


def require_lookup_key(value: Any, label: str) -> str:
    """Return *value* with surrounding whitespace removed.

    Raises:
        InvalidArgumentError: if *value* is None, not a string, blank, or one
                              of REJECTED_KEYS.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{label} must be a non-empty string")
    key = value.strip()
    if key in REJECTED_KEYS:
        raise InvalidArgumentError(f"Invalid {label}: {key!r}")
    return key


def normalize_country_code(code: Any) -> str:
    """Validated ISO 3166-1 alpha-2/alpha-3 code, upper-cased."""
    return require_lookup_key(code, "country code").upper()


def normalize_capital(capital: Any) -> str:
    return require_lookup_key(capital, "capital name")
