"""
Test fixtures package for ingestion tests.

Provides mock exchange responses, a scripted HTTP client and helper utilities.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlsplit

from crypto_ledger.ingestion.ports.http import HttpResponse

TRON_WALLET = "TAUDuQAZSTUH88xno1imPoKN25eJN6aJkN"
ETH_WALLET = "0x856851a1d5111330729744f95238e5D810ba773c"
BTC_WALLET = "bc1qkuefzcmc6c8enw9f7a2e9w2hy964q3jgwcv35g"


def load_fixture(fixture_name: str) -> Any:
    """
    Load fixture data from exchange_responses.json.

    Args:
        fixture_name: Name of the fixture to load

    Returns:
        Fixture data (dict, list, etc.)

    Example:
        >>> deposits = load_fixture("binance_deposits")
    """
    fixtures_path = Path(__file__).parent / "exchange_responses.json"

    with open(fixtures_path) as f:
        all_fixtures = json.load(f)

    if fixture_name not in all_fixtures:
        raise KeyError(f"Fixture '{fixture_name}' not found")

    return all_fixtures[fixture_name]


def json_response(body: Any, status_code: int = 200, reason: str = "OK") -> HttpResponse:
    return HttpResponse(status_code=status_code, body=body, reason=reason)


def query_params(url: str) -> dict[str, str]:
    """Flatten a URL's query string to {key: value}."""
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


Route = HttpResponse | Exception | Callable[[str, dict[str, str]], HttpResponse]


class FakeHttpClient:
    """
    IHttpClient that answers from a {url path: response} table.

    A route may be an HttpResponse, an exception to raise, or a callable
    taking (url, headers). Unrouted paths answer 404. Every call is recorded.
    """

    def __init__(self, routes: dict[str, Route] | None = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    def _respond(self, url: str, headers: dict[str, str]) -> HttpResponse:
        route = self.routes.get(urlsplit(url).path)
        if route is None:
            return json_response({"msg": "Not Found"}, 404, "Not Found")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(url, headers)
        return route

    async def get(self, url, params=None, headers=None) -> HttpResponse:
        self.calls.append(("GET", url, dict(headers or {})))
        return self._respond(url, dict(headers or {}))

    async def post(self, url, data=None, headers=None) -> HttpResponse:
        self.calls.append(("POST", url, dict(headers or {})))
        return self._respond(url, dict(headers or {}))

    def paths(self) -> list[str]:
        return [urlsplit(url).path for _, url, _ in self.calls]
