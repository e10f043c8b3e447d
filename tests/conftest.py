"""
Pytest configuration and fixtures for the country services tests.

Every HTTP exchange is served by httpx.MockTransport; no test reaches the
real REST Countries API.
"""

import asyncio
import copy
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable

import httpx
import pytest

from country_services.infrastructure.entrypoints.country_service import CountryService
from country_services.infrastructure.rest_countries.rest_countries_adapter import RestCountriesProvider

SERVICE_URL = "https://restcountries.com/v2"


US_ALPHA_BODY = {
    "name": "United States of America",
    "alpha2Code": "US",
    "alpha3Code": "USA",
    "capital": "Washington, D.C.",
    "currencies": [
        {"code": "USD", "name": "United States dollar", "symbol": "$"},
    ],
}

MINSK_CAPITAL_BODY = [
    {
        "name": "Belarus",
        "alpha2Code": "BY",
        "capital": "Minsk",
        "area": 207600.0,
        "population": 9398861,
        "flag": "https://flagcdn.com/by.svg",
        "currencies": [{"code": "BYN", "name": "New Belarusian ruble", "symbol": "Br"}],
    }
]


class FakeRestCountries:
    """Serves canned responses by request path and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self.stall = False

    def add_json(self, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=body)

    def add_text(self, path: str, text: str, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, text=text)

    def add_error(self, path: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self.routes[path] = raise_error

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    async def handle_async(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.stall:
            await asyncio.sleep(3600)
        return self._respond(request)

    @property
    def paths(self) -> list[str]:
        return [request.url.raw_path.decode("ascii") for request in self.requests]

    def _respond(self, request: httpx.Request) -> httpx.Response:
        route = self.routes.get(request.url.raw_path.decode("ascii"))
        if route is None:
            return httpx.Response(404, json={"status": 404, "message": "Not Found"})
        return route(request)


@pytest.fixture
def api():
    """Fake API preloaded with the United States and Minsk fixtures."""
    fake = FakeRestCountries()
    fake.add_json("/v2/alpha/US", US_ALPHA_BODY)
    fake.add_json("/v2/capital/Minsk", MINSK_CAPITAL_BODY)
    return fake


@pytest.fixture
def http_clients(api):
    client = httpx.Client(transport=httpx.MockTransport(api.handle))
    async_client = httpx.AsyncClient(transport=httpx.MockTransport(api.handle_async))
    yield client, async_client
    client.close()
    asyncio.run(async_client.aclose())


@pytest.fixture
def provider(http_clients):
    client, async_client = http_clients
    return RestCountriesProvider(SERVICE_URL, client=client, async_client=async_client)


@pytest.fixture
def service(http_clients):
    client, async_client = http_clients
    return CountryService(SERVICE_URL, client=client, async_client=async_client)


@pytest.fixture
def uncached_service(http_clients):
    client, async_client = http_clients
    return CountryService(
        SERVICE_URL,
        cache_enabled=False,
        client=client,
        async_client=async_client,
    )


@pytest.fixture
def us_alpha_body():
    return copy.deepcopy(US_ALPHA_BODY)


@pytest.fixture
def minsk_capital_body():
    return copy.deepcopy(MINSK_CAPITAL_BODY)


class _KeepAliveHandler(BaseHTTPRequestHandler):
    """Answers every GET from US_ALPHA_BODY over persistent HTTP/1.1 connections."""

    protocol_version = "HTTP/1.1"

    def do_GET(self) -> None:
        payload = json.dumps(US_ALPHA_BODY).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:
        pass


@pytest.fixture
def local_service_url():
    """Base URL of a loopback server that keeps connections open between requests."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _KeepAliveHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}/v2"
    server.shutdown()
    server.server_close()
