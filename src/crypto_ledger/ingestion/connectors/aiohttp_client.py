"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction. The session is created lazily
and owned by whoever constructed the client; call `close()` (or use the
client as an async context manager) when done.
"""

import json
from typing import Any

import aiohttp

from crypto_ledger.ingestion.config.value_objects import HttpClientConfig
from crypto_ledger.ingestion.ports.http import HttpResponse, IHttpClient


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig | None = None):
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            kwargs: dict[str, Any] = {
                "headers": {"User-Agent": self.config.user_agent},
            }
            if self.config.timeout is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    @staticmethod
    async def _to_response(resp: aiohttp.ClientResponse) -> HttpResponse:
        text = await resp.text()
        try:
            body: Any = json.loads(text) if text else None
        except json.JSONDecodeError:
            body = text
        return HttpResponse(
            status_code=resp.status,
            body=body,
            headers=dict(resp.headers),
            url=str(resp.url),
            reason=resp.reason or "",
        )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Raises:
            aiohttp.ClientError: On connection errors
        """
        session = await self._get_session()
        async with session.get(url, params=params, headers=headers) as resp:
            return await self._to_response(resp)

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute POST request.

        Raises:
            aiohttp.ClientError: On connection errors
        """
        session = await self._get_session()
        async with session.post(url, json=data, headers=headers) as resp:
            return await self._to_response(resp)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AiohttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
