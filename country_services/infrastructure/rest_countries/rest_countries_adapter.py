"""
Infrastructure adapter: REST Countries API (httpx) -> ICountryDataProvider.

All httpx and pydantic details are confined here; the rest of the codebase
depends only on ICountryDataProvider and the domain exceptions.

Blocking calls go through an httpx.Client and suspending calls through an
httpx.AsyncClient. The blocking client is created once and shared by every
call. An owned AsyncClient is created on first use and replaced when calls
arrive from another event loop, since its pooled connections cannot cross
loops. JSON parsing and mapping are the same for both paths.
"""

import asyncio
import contextlib
import logging
from typing import Any, Iterator, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from country_services.domain.entities.country import CountryInfo, LocalCurrency
from country_services.domain.exceptions import (
    CountryNotFoundError,
    CountryServiceError,
    MalformedResponseError,
    RemoteUnavailableError,
    UnknownLookupError,
)
from country_services.domain.ports.country_data_port import ICountryDataProvider
from country_services.infrastructure.rest_countries.schemas import (
    CountryCurrencyPayload,
    CountryInfoPayload,
)

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "https://restcountries.com/v2"
DEFAULT_TIMEOUT = 10.0

_HEADERS = {"Accept": "application/json"}


class RestCountriesProvider(ICountryDataProvider):
    """Fetches country metadata from the REST Countries API."""

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            service_url:  API root, e.g. 'https://restcountries.com/v2'. Not contacted here.
            timeout:      Per-request timeout in seconds for clients created here.
            client:       Optional pre-configured httpx.Client. Not closed by close().
            async_client: Optional pre-configured httpx.AsyncClient. Not closed by aclose().
        """
        self._service_url = service_url.rstrip("/")
        self._owns_client = client is None
        self._owns_async_client = async_client is None
        self._timeout = timeout
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        # An owned AsyncClient is bound to the loop it was created on; see _async_client_for_loop().
        self._async_client = async_client
        self._async_client_loop: Optional[asyncio.AbstractEventLoop] = None

    # ------------------------------------------------------------------
    # ICountryDataProvider interface
    # ------------------------------------------------------------------

    def fetch_local_currency(self, code: str) -> LocalCurrency:
        url = self._url("alpha", code)
        with _translate_errors(url):
            logger.debug("GET %s", url)
            response = self._client.get(url, headers=_HEADERS)
            return _parse_local_currency(_decode(response, url))

    async def fetch_local_currency_async(self, code: str) -> LocalCurrency:
        url = self._url("alpha", code)
        with _translate_errors(url):
            logger.debug("GET %s", url)
            response = await self._async_client_for_loop().get(url, headers=_HEADERS)
            return _parse_local_currency(_decode(response, url))

    def fetch_country_info(self, capital: str) -> CountryInfo:
        url = self._url("capital", capital)
        with _translate_errors(url):
            logger.debug("GET %s", url)
            response = self._client.get(url, headers=_HEADERS)
            return _parse_country_info(_decode(response, url))

    async def fetch_country_info_async(self, capital: str) -> CountryInfo:
        url = self._url("capital", capital)
        with _translate_errors(url):
            logger.debug("GET %s", url)
            response = await self._async_client_for_loop().get(url, headers=_HEADERS)
            return _parse_country_info(_decode(response, url))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the blocking client if this provider created it."""
        if self._owns_client:
            self._client.close()

    async def aclose(self) -> None:
        """Close both clients if this provider created them."""
        if self._owns_async_client and self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None
            self._async_client_loop = None
        self.close()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _url(self, resource: str, key: str) -> str:
        return f"{self._service_url}/{resource}/{quote(key, safe='')}"

    def _async_client_for_loop(self) -> httpx.AsyncClient:
        """Return the AsyncClient to use on the running event loop.

        Pooled connections belong to the loop that opened them, so an owned
        client is replaced whenever calls arrive from a different loop (e.g.
        successive asyncio.run() calls). Injected clients are used as given.
        """
        if not self._owns_async_client:
            return self._async_client
        loop = asyncio.get_running_loop()
        if self._async_client is None or self._async_client_loop is not loop:
            if self._async_client is not None:
                logger.debug("Event loop changed, replacing the owned AsyncClient")
            self._async_client = httpx.AsyncClient(timeout=self._timeout)
            self._async_client_loop = loop
        return self._async_client


@contextlib.contextmanager
def _translate_errors(url: str) -> Iterator[None]:
    """Re-raise anything that is not already a CountryServiceError as one."""
    try:
        yield
    except CountryServiceError:
        raise
    except httpx.RequestError as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        raise RemoteUnavailableError(
            f"Failed to retrieve {url}. Check your network connection."
        ) from exc
    except Exception as exc:
        logger.warning("Unexpected error while requesting %s: %r", url, exc)
        raise UnknownLookupError(f"An error occurred while requesting {url}: {exc}") from exc


def _decode(response: httpx.Response, url: str) -> Any:
    if response.status_code == httpx.codes.NOT_FOUND:
        raise CountryNotFoundError(f"No country found at {url}")
    if not response.is_success:
        raise RemoteUnavailableError(
            f"{url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Response from {url} is not valid JSON") from exc


def _parse_local_currency(payload: Any) -> LocalCurrency:
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    try:
        return CountryCurrencyPayload.model_validate(payload).to_entity()
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected currency payload: {exc}") from exc


def _parse_country_info(payload: Any) -> CountryInfo:
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Expected a JSON array, got {type(payload).__name__}"
        )
    if not payload:
        raise MalformedResponseError("No country information found in the JSON array.")
    try:
        return CountryInfoPayload.model_validate(payload[0]).to_entity()
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected country payload: {exc}") from exc
