"""TRON wallet processor: TRC20 token transfers and native TRX transfers."""

from datetime import datetime

from crypto_ledger.config.state import TronSettings
from crypto_ledger.ingestion.adapters.tron_plugin.client import TronGridClient
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import (
    BaseWalletProcessor,
    Clock,
    SubEndpoint,
    to_epoch_millis,
)
from crypto_ledger.ingestion.schemas.tron import (
    Trc20Transfer,
    TronGridResponse,
    TronTransaction,
)
from crypto_ledger.shared.models.accounts import WalletConfig
from crypto_ledger.shared.models.enums import ApiSource
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.adapters.tron import (
    normalize_trx_transfer,
    normalize_tron_transfer,
)


class TronWalletProcessor(BaseWalletProcessor):
    exchange = "tron"

    def __init__(
        self,
        wallet: WalletConfig,
        settings: TronSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        super().__init__(wallet, clock=clock)
        self.client = TronGridClient(settings, fetcher)

    def sub_endpoints(self) -> list[SubEndpoint]:
        return [
            SubEndpoint(ApiSource.TRONGRID_DEPOSIT.value, self.fetch_deposits),
            SubEndpoint(ApiSource.TRONGRID_WITHDRAWAL.value, self.fetch_withdrawals),
            SubEndpoint(ApiSource.TRONGRID_TRX_DEPOSIT.value, self.fetch_trx_deposits),
            SubEndpoint(
                ApiSource.TRONGRID_TRX_WITHDRAWAL.value, self.fetch_trx_withdrawals
            ),
        ]

    async def _transfers(
        self, since: datetime | None, only_to: bool = False, only_from: bool = False
    ) -> list[Transaction]:
        body = await self.client.trc20_transfers(
            self.wallet.address,
            min_timestamp=to_epoch_millis(since) if since is not None else None,
            only_to=only_to,
            only_from=only_from,
        )
        response = TronGridResponse.model_validate(body or {})
        transactions = []
        for row in response.data:
            tx = normalize_tron_transfer(
                Trc20Transfer.model_validate(row), self.wallet.address, self.platform
            )
            if tx is not None:
                transactions.append(tx)
        return transactions

    async def _trx_transfers(
        self, since: datetime | None, only_to: bool = False, only_from: bool = False
    ) -> list[Transaction]:
        body = await self.client.trx_transactions(
            self.wallet.address,
            min_timestamp=to_epoch_millis(since) if since is not None else None,
            only_to=only_to,
            only_from=only_from,
        )
        response = TronGridResponse.model_validate(body or {})
        transactions = []
        for row in response.data:
            tx = normalize_trx_transfer(
                TronTransaction.model_validate(row), self.wallet.address, self.platform
            )
            if tx is not None:
                transactions.append(tx)
        return transactions

    async def fetch_deposits(self, since: datetime | None) -> list[Transaction]:
        return await self._transfers(since, only_to=True)

    async def fetch_withdrawals(self, since: datetime | None) -> list[Transaction]:
        return await self._transfers(since, only_from=True)

    async def fetch_trx_deposits(self, since: datetime | None) -> list[Transaction]:
        return await self._trx_transfers(since, only_to=True)

    async def fetch_trx_withdrawals(self, since: datetime | None) -> list[Transaction]:
        return await self._trx_transfers(since, only_from=True)
