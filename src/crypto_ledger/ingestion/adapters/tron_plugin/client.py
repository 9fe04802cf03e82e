"""TronGrid explorer client (unauthenticated, optional API key header)."""

from typing import Any

from crypto_ledger.config.state import TronSettings
from crypto_ledger.ingestion.error_mapper import ErrorMapper
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.signing import build_query_string


class TronGridClient:
    def __init__(self, settings: TronSettings, fetcher: Fetcher):
        self.settings = settings
        self.fetcher = fetcher

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.settings.api_key:
            headers["TRON-PRO-API-KEY"] = self.settings.api_key

        query_string = build_query_string(params or {})
        url = f"{self.settings.base_url}{path}"
        if query_string:
            url = f"{url}?{query_string}"

        body = await self.fetcher.fetch_json(url, headers=headers, endpoint=path)
        if error := ErrorMapper.map_body_error(body, path):
            raise error
        return body

    def _account_params(
        self, min_timestamp: int | None, only_to: bool, only_from: bool
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "limit": self.settings.page_limit,
            "order_by": "block_timestamp,desc",
        }
        if min_timestamp is not None:
            params["min_timestamp"] = min_timestamp
        if only_to:
            params["only_to"] = True
        if only_from:
            params["only_from"] = True
        return params

    async def trc20_transfers(
        self,
        address: str,
        min_timestamp: int | None = None,
        only_to: bool = False,
        only_from: bool = False,
    ) -> Any:
        params = self._account_params(min_timestamp, only_to, only_from)
        return await self.get(f"/v1/accounts/{address}/transactions/trc20", params)

    async def trx_transactions(
        self,
        address: str,
        min_timestamp: int | None = None,
        only_to: bool = False,
        only_from: bool = False,
    ) -> Any:
        """Native transactions; visible=true returns base58 addresses instead of hex."""
        params = self._account_params(min_timestamp, only_to, only_from)
        params["visible"] = True
        return await self.get(f"/v1/accounts/{address}/transactions", params)
