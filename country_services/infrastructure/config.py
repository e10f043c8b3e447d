"""
Runtime settings read from the process environment.

load_dotenv() is called by the composition root before from_env(), so a
local .env file can supply any of the variables below.

    COUNTRY_SERVICE_URL            API root (default https://restcountries.com/v2)
    COUNTRY_SERVICE_TIMEOUT        request timeout in seconds (default 10)
    COUNTRY_SERVICE_CACHE_ENABLED  cache currency lookups (default true)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from country_services.infrastructure.rest_countries.rest_countries_adapter import (
    DEFAULT_SERVICE_URL,
    DEFAULT_TIMEOUT,
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class CountryServiceSettings:
    service_url: str = DEFAULT_SERVICE_URL
    timeout: float = DEFAULT_TIMEOUT
    cache_enabled: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CountryServiceSettings":
        """Build settings from *environ* (defaults to os.environ).

        Raises:
            ValueError: if a variable is set to a value that cannot be parsed.
        """
        env = os.environ if environ is None else environ
        return cls(
            service_url=env.get("COUNTRY_SERVICE_URL", "").strip() or DEFAULT_SERVICE_URL,
            timeout=_parse_timeout(env.get("COUNTRY_SERVICE_TIMEOUT")),
            cache_enabled=_parse_flag("COUNTRY_SERVICE_CACHE_ENABLED", env.get("COUNTRY_SERVICE_CACHE_ENABLED")),
        )


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"COUNTRY_SERVICE_TIMEOUT must be a number, got {raw!r}") from exc
    if not timeout > 0:
        raise ValueError(f"COUNTRY_SERVICE_TIMEOUT must be positive, got {raw!r}")
    return timeout


def _parse_flag(name: str, raw: Optional[str], default: bool = True) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE | _FALSE)}, got {raw!r}")
