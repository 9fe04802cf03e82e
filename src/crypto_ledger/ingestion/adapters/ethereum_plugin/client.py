"""Etherscan V2 client: normal transactions of one address."""

from typing import Any

from crypto_ledger.config.state import EthereumSettings
from crypto_ledger.ingestion.exceptions import ExchangeAPIError
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.signing import build_query_string

TXLIST_ENDPOINT = "etherscan:txlist"
# status "0" with this message is an empty history, not a failure
NO_TRANSACTIONS_MESSAGE = "No transactions found"


class EtherscanClient:
    def __init__(self, settings: EthereumSettings, fetcher: Fetcher):
        self.settings = settings
        self.fetcher = fetcher

    async def txlist(self, address: str) -> Any:
        """
        Newest-first normal transactions, one page.

        Raises:
            ExchangeAPIError: Etherscan answered with status "0" for a reason
                other than an empty history (bad key, rate limit, ...)
        """
        params: dict[str, Any] = {
            "chainid": self.settings.chain_id,
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": 0,
            "endblock": 99999999,
            "page": 1,
            "offset": self.settings.page_limit,
            "sort": "desc",
        }
        if self.settings.api_key:
            params["apikey"] = self.settings.api_key

        url = f"{self.settings.base_url}?{build_query_string(params)}"
        body = await self.fetcher.fetch_json(
            url, headers={"Accept": "application/json"}, endpoint=TXLIST_ENDPOINT
        )

        if isinstance(body, dict) and str(body.get("status")) == "0":
            message = body.get("message") or ""
            if message != NO_TRANSACTIONS_MESSAGE:
                detail = body.get("result")
                raise ExchangeAPIError(
                    f"API error for {TXLIST_ENDPOINT}: "
                    f"{detail if isinstance(detail, str) and detail else message}",
                    endpoint=TXLIST_ENDPOINT,
                )
        return body
