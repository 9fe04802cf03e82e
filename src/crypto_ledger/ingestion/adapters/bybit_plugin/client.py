"""Signed REST client for ByBit V5 asset endpoints."""

from typing import Any

from crypto_ledger.config.state import BybitSettings
from crypto_ledger.ingestion.error_mapper import ErrorMapper
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import Clock, utc_now
from crypto_ledger.ingestion.signing import build_query_string, sign_bybit_v5
from crypto_ledger.shared.models.accounts import AccountCredential


class BybitClient:
    """Builds V5-signed GET requests for one ByBit account.

    The signature covers timestamp + api_key + recv_window + query string and
    travels in the X-BAPI-* headers rather than the URL.
    """

    def __init__(
        self,
        credential: AccountCredential,
        settings: BybitSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        self.credential = credential
        self.settings = settings
        self.fetcher = fetcher
        self.clock = clock or utc_now

    def build_request(
        self, path: str, params: dict[str, Any]
    ) -> tuple[str, dict[str, str]]:
        timestamp = str(int(self.clock().timestamp() * 1000))
        recv_window = str(self.settings.recv_window)
        query_string = build_query_string(params)
        signature = sign_bybit_v5(
            timestamp,
            self.credential.api_key,
            recv_window,
            query_string,
            self.credential.api_secret,
        )
        headers = {
            "X-BAPI-API-KEY": self.credential.api_key,
            "X-BAPI-SIGN": signature,
            "X-BAPI-TIMESTAMP": timestamp,
            "X-BAPI-RECV-WINDOW": recv_window,
            "Content-Type": "application/json",
        }
        url = f"{self.settings.base_url}{path}"
        if query_string:
            url = f"{url}?{query_string}"
        return url, headers

    async def signed_get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Fetch a signed endpoint.

        Raises:
            HttpError: Non-2xx status
            ExchangeAPIError: retCode is non-zero
        """
        url, headers = self.build_request(path, params or {})
        body = await self.fetcher.fetch_json(url, headers=headers, endpoint=path)
        if error := ErrorMapper.map_body_error(body, path):
            raise error
        return body
