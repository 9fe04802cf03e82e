"""Bitcoin wallet processor: confirmed transactions via Blockstream."""

from datetime import datetime

from crypto_ledger.config.state import BitcoinSettings
from crypto_ledger.ingestion.adapters.bitcoin_plugin.client import BlockstreamClient
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import (
    BaseWalletProcessor,
    Clock,
    SubEndpoint,
)
from crypto_ledger.ingestion.schemas.bitcoin import BlockstreamTransactionList
from crypto_ledger.shared.models.accounts import WalletConfig
from crypto_ledger.shared.models.enums import ApiSource
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.adapters.bitcoin import normalize_btc_transaction


class BitcoinWalletProcessor(BaseWalletProcessor):
    exchange = "bitcoin"

    def __init__(
        self,
        wallet: WalletConfig,
        settings: BitcoinSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        super().__init__(wallet, clock=clock)
        self.client = BlockstreamClient(settings, fetcher)

    def sub_endpoints(self) -> list[SubEndpoint]:
        return [SubEndpoint(ApiSource.BLOCKSTREAM.value, self.fetch_transactions)]

    async def fetch_transactions(self, since: datetime | None) -> list[Transaction]:
        body = await self.client.address_transactions(self.wallet.address)
        records = BlockstreamTransactionList.validate_python(body or [])
        return [
            tx
            for tx in (
                normalize_btc_transaction(r, self.wallet.address, self.platform)
                for r in records
            )
            if tx is not None
        ]
