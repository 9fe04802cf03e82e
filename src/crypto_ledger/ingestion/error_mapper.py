"""
Ledger Error Mapper

Maps HTTP status codes and API error bodies to specific exception types,
providing context-rich error messages for debugging.
"""

from typing import Any

from crypto_ledger.ingestion.exceptions import (
    AuthenticationError,
    ExchangeAPIError,
    HttpError,
    RateLimitError,
    RegionBlockedError,
    ServerError,
)

REGION_BLOCKED_STATUS = 451


class ErrorMapper:
    """Maps HTTP status codes to appropriate exception types."""

    @staticmethod
    def extract_error_message(response_body: Any) -> str:
        """Extract error message from response body."""
        if isinstance(response_body, str):
            return response_body
        elif isinstance(response_body, dict):
            # Binance uses msg, ByBit retMsg, TronGrid error
            return (
                response_body.get("msg")
                or response_body.get("retMsg")
                or response_body.get("error")
                or response_body.get("message")
                or str(response_body)
            )
        elif response_body is None:
            return ""
        else:
            return str(response_body)

    @staticmethod
    def map_error(
        status_code: int,
        response_body: Any,
        endpoint: str,
        status_text: str = "",
    ) -> HttpError:
        """
        Map a non-2xx HTTP status code to a specific exception with context.

        Args:
            status_code: HTTP status code
            response_body: Response body (dict, str, or other)
            endpoint: API endpoint that was called
            status_text: HTTP reason phrase

        Returns:
            Appropriate HttpError subclass instance
        """
        error_msg = ErrorMapper.extract_error_message(response_body) or status_text
        kwargs = {
            "status_code": status_code,
            "status_text": status_text,
            "endpoint": endpoint,
        }

        if status_code == REGION_BLOCKED_STATUS:
            return RegionBlockedError(
                f"Region blocked (HTTP 451) for {endpoint}", **kwargs
            )
        elif status_code in (401, 403):
            return AuthenticationError(
                f"Authentication failed for {endpoint}: {error_msg}", **kwargs
            )
        elif status_code in (418, 429):
            return RateLimitError(
                f"Rate limit exceeded for {endpoint}: {error_msg}", **kwargs
            )
        elif status_code >= 500:
            return ServerError(
                f"Server error {status_code} for {endpoint}: {error_msg}", **kwargs
            )
        else:
            return HttpError(
                f"HTTP {status_code} for {endpoint}: {error_msg}", **kwargs
            )

    @staticmethod
    def map_body_error(response_body: Any, endpoint: str) -> ExchangeAPIError | None:
        """
        Detect API errors reported inside a 2xx body.

        Binance signals errors with a negative `code`; ByBit with a non-zero
        `retCode`; TronGrid with `success: false`.
        """
        if not isinstance(response_body, dict):
            return None

        code = response_body.get("code")
        if isinstance(code, int) and code < 0:
            return ExchangeAPIError(
                f"API error {code} for {endpoint}: "
                f"{ErrorMapper.extract_error_message(response_body)}",
                code=code,
                endpoint=endpoint,
            )

        ret_code = response_body.get("retCode")
        if ret_code is not None and ret_code != 0:
            return ExchangeAPIError(
                f"API error {ret_code} for {endpoint}: "
                f"{response_body.get('retMsg') or 'unknown error'}",
                code=ret_code,
                endpoint=endpoint,
            )

        if response_body.get("success") is False:
            return ExchangeAPIError(
                f"API error for {endpoint}: "
                f"{ErrorMapper.extract_error_message(response_body)}",
                endpoint=endpoint,
            )

        return None
