"""Ethereum wallet processor: native ETH transfers via Etherscan."""

from datetime import datetime

from crypto_ledger.config.state import EthereumSettings
from crypto_ledger.ingestion.adapters.ethereum_plugin.client import EtherscanClient
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import (
    BaseWalletProcessor,
    Clock,
    SubEndpoint,
)
from crypto_ledger.ingestion.schemas.ethereum import (
    EtherscanResponse,
    EtherscanTransaction,
)
from crypto_ledger.shared.models.accounts import WalletConfig
from crypto_ledger.shared.models.enums import ApiSource
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.adapters.ethereum import normalize_eth_transaction


class EthereumWalletProcessor(BaseWalletProcessor):
    exchange = "ethereum"

    def __init__(
        self,
        wallet: WalletConfig,
        settings: EthereumSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        super().__init__(wallet, clock=clock)
        self.client = EtherscanClient(settings, fetcher)

    def sub_endpoints(self) -> list[SubEndpoint]:
        return [SubEndpoint(ApiSource.ETHERSCAN.value, self.fetch_transactions)]

    async def fetch_transactions(self, since: datetime | None) -> list[Transaction]:
        # txlist has no time filter; process() drops rows older than `since`
        body = await self.client.txlist(self.wallet.address)
        response = EtherscanResponse.model_validate(body or {})
        transactions = []
        for row in response.rows:
            tx = normalize_eth_transaction(
                EtherscanTransaction.model_validate(row),
                self.wallet.address,
                self.platform,
            )
            if tx is not None:
                transactions.append(tx)
        return transactions
