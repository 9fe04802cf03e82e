"""Blockstream Esplora client (public, unauthenticated)."""

from typing import Any

from crypto_ledger.config.state import BitcoinSettings
from crypto_ledger.ingestion.fetcher import Fetcher


class BlockstreamClient:
    def __init__(self, settings: BitcoinSettings, fetcher: Fetcher):
        self.settings = settings
        self.fetcher = fetcher

    async def address_transactions(self, address: str) -> Any:
        """Mempool transactions plus the newest confirmed ones (one page)."""
        path = f"/address/{address}/txs"
        return await self.fetcher.fetch_json(
            f"{self.settings.base_url}{path}",
            headers={"Accept": "application/json"},
            endpoint=path,
        )
