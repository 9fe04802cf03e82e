"""Signed REST client for Binance SAPI endpoints."""

from typing import Any

from crypto_ledger.config.state import BinanceSettings
from crypto_ledger.ingestion.error_mapper import ErrorMapper
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import Clock, utc_now
from crypto_ledger.ingestion.signing import sign
from crypto_ledger.shared.models.accounts import AccountCredential


class BinanceClient:
    """Builds HMAC-signed GET requests for one Binance account.

    Every call carries `timestamp` and `recvWindow`, is signed over the
    sorted query string, and sends the key in `X-MBX-APIKEY`.
    """

    def __init__(
        self,
        credential: AccountCredential,
        settings: BinanceSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        self.credential = credential
        self.settings = settings
        self.fetcher = fetcher
        self.clock = clock or utc_now

    def _timestamp(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def build_url(self, path: str, params: dict[str, Any]) -> str:
        signed = sign(
            {
                **params,
                "timestamp": self._timestamp(),
                "recvWindow": self.settings.recv_window,
            },
            self.credential.api_secret,
        )
        return f"{self.settings.base_url}{path}?{signed.signed_query_string}"

    async def signed_get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Fetch a signed endpoint.

        Raises:
            HttpError: Non-2xx status
            ExchangeAPIError: Body carries a negative Binance error code
        """
        body = await self.fetcher.fetch_json(
            self.build_url(path, params or {}),
            headers={"X-MBX-APIKEY": self.credential.api_key},
            endpoint=path,
        )
        if error := ErrorMapper.map_body_error(body, path):
            raise error
        return body
