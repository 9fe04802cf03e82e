"""Configuration value objects for dependency injection.

Instead of injecting the whole ConfigState, inject specific configuration
dataclasses into each component.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client.

    `timeout=None` leaves the aiohttp session default in place.
    """

    timeout: float | None = None
    user_agent: str = "crypto-ledger/0.1"
