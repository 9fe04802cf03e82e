"""JSON fetcher: one outbound request, mapped status, parsed body.

Single Responsibility: turn one HTTP exchange into either a parsed JSON body
or a typed error. No retries, caching or rate limiting happen here.
"""

from typing import Any

import aiohttp

from crypto_ledger.infrastructure.observability import get_ingestion_logger
from crypto_ledger.ingestion.error_mapper import ErrorMapper
from crypto_ledger.ingestion.exceptions import TransportError
from crypto_ledger.ingestion.ports.http import IHttpClient

logger = get_ingestion_logger("fetcher")


class Fetcher:
    """Executes a single request through an injected IHttpClient."""

    def __init__(self, http_client: IHttpClient, error_mapper: ErrorMapper | None = None):
        self.http_client = http_client
        self.error_mapper = error_mapper or ErrorMapper()

    async def fetch_json(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        method: str = "GET",
        data: dict[str, Any] | None = None,
        endpoint: str | None = None,
    ) -> Any:
        """
        Fetch and parse a JSON body.

        Args:
            url: Full URL including any signed query string
            headers: Request headers
            method: "GET" or "POST"
            data: JSON body for POST requests
            endpoint: Name used in error messages (defaults to the URL path)

        Returns:
            Parsed JSON body

        Raises:
            HttpError: Non-2xx status (RegionBlockedError for 451)
            TransportError: Connection failure or a 2xx body that is not JSON
        """
        endpoint = endpoint or url.split("?", 1)[0]
        method = method.upper()

        try:
            if method == "GET":
                response = await self.http_client.get(url, headers=headers)
            elif method == "POST":
                response = await self.http_client.post(url, data=data, headers=headers)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except aiohttp.ClientError as e:
            logger.warning("request_failed", endpoint=endpoint, error=str(e))
            raise TransportError(
                f"Request to {endpoint} failed: {e}", endpoint=endpoint
            ) from e
        except TimeoutError as e:
            logger.warning("request_timed_out", endpoint=endpoint)
            raise TransportError(
                f"Request to {endpoint} timed out", endpoint=endpoint
            ) from e

        if not 200 <= response.status_code < 300:
            error = self.error_mapper.map_error(
                response.status_code,
                response.body,
                endpoint,
                status_text=response.reason,
            )
            logger.warning(
                "request_rejected",
                endpoint=endpoint,
                status_code=response.status_code,
                error=str(error),
            )
            raise error

        if isinstance(response.body, str):
            raise TransportError(
                f"Invalid JSON from {endpoint}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        logger.debug("request_completed", endpoint=endpoint, status_code=response.status_code)
        return response.body
