"""
Ledger Exception Hierarchy

Provides specific exception types for the failure scenarios of outbound
exchange and explorer calls, enabling account processors to classify
errors per sub-endpoint.
"""


class LedgerError(Exception):
    """Base exception for all crypto-ledger errors."""


class TransportError(LedgerError):
    """Network failure, or a response that could not be used at all."""

    def __init__(
        self, message: str, status_code: int | None = None, endpoint: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class HttpError(TransportError):
    """Non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        endpoint: str | None = None,
    ):
        super().__init__(message, status_code=status_code, endpoint=endpoint)
        self.status_text = status_text


class AuthenticationError(HttpError):
    """401/403 - Invalid key, bad signature, or IP not whitelisted."""


class RateLimitError(HttpError):
    """429/418 - Rate limit exceeded. Not retried."""


class ServerError(HttpError):
    """500+ - Server-side error."""


class RegionBlockedError(HttpError):
    """451 - Service unavailable from the caller's jurisdiction."""


class ExchangeAPIError(LedgerError):
    """2xx response whose body reports an API error code."""

    def __init__(self, message: str, code: int | str | None = None, endpoint: str | None = None):
        super().__init__(message)
        self.code = code
        self.endpoint = endpoint


class AggregateError(LedgerError):
    """Aggregation could not be set up; no partial results are returned."""
