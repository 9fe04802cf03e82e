"""HTTP communication abstractions for the ingestion layer.

Separates HTTP transport from business logic (signing, status mapping,
normalization). Allows easy mocking and swapping of HTTP implementations in tests.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body, or raw text when not JSON
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return responses.
    Does NOT handle:
    - Status code mapping
    - Retry logic
    - Request signing
    """

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Raises:
            aiohttp.ClientError: On network or connection errors
        """
        ...

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute POST request with a JSON body.

        Raises:
            aiohttp.ClientError: On network or connection errors
        """
        ...
