"""
Request signing for exchange REST APIs.

Pure functions: identical inputs always produce identical output and no
state is touched.
"""

import hashlib
import hmac
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote


@dataclass(frozen=True)
class SignedQuery:
    query_string: str
    signature: str

    @property
    def signed_query_string(self) -> str:
        """Query string with the signature appended, as Binance expects it."""
        return f"{self.query_string}&signature={self.signature}"


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def build_query_string(params: dict[str, Any]) -> str:
    """Canonical query string: keys sorted, keys and values percent-encoded."""
    return "&".join(
        f"{_encode(key)}={_encode(params[key])}" for key in sorted(params)
    )


def hmac_sha256_hex(message: str, secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def sign(params: dict[str, Any], secret: str) -> SignedQuery:
    """
    Sign request parameters with HMAC-SHA256.

    Args:
        params: Request parameters, in any order
        secret: API secret

    Returns:
        SignedQuery with the canonical query string and lowercase hex signature
    """
    query_string = build_query_string(params)
    return SignedQuery(query_string, hmac_sha256_hex(query_string, secret))


def sign_bybit_v5(
    timestamp: int | str,
    api_key: str,
    recv_window: int | str,
    query_string: str,
    secret: str,
) -> str:
    """ByBit V5 signature over timestamp + api_key + recv_window + query_string."""
    return hmac_sha256_hex(f"{timestamp}{api_key}{recv_window}{query_string}", secret)
