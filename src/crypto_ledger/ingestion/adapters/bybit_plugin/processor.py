"""ByBit account processor: V5 deposits and withdrawals."""

from datetime import datetime

from crypto_ledger.config.state import BybitSettings
from crypto_ledger.ingestion.adapters.bybit_plugin.client import BybitClient
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import (
    BaseAccountProcessor,
    Clock,
    SubEndpoint,
    to_epoch_millis,
)
from crypto_ledger.ingestion.schemas.bybit import (
    BybitDepositRecord,
    BybitEnvelope,
    BybitWithdrawalRecord,
)
from crypto_ledger.shared.models.accounts import AccountCredential
from crypto_ledger.shared.models.enums import ApiSource, Exchange, SuccessPolicy
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.adapters.bybit import (
    normalize_bybit_deposit,
    normalize_bybit_withdrawal,
)


class BybitAccountProcessor(BaseAccountProcessor):
    success_policy = SuccessPolicy.EXCHANGE
    exchange = "bybit"

    def __init__(
        self,
        credential: AccountCredential,
        settings: BybitSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        super().__init__(credential.label(Exchange.BYBIT), clock=clock)
        self.settings = settings
        self.client = BybitClient(credential, settings, fetcher, clock=self.clock)

    def sub_endpoints(self) -> list[SubEndpoint]:
        return [
            SubEndpoint(ApiSource.BYBIT_DEPOSIT.value, self.fetch_deposits),
            SubEndpoint(ApiSource.BYBIT_WITHDRAWAL.value, self.fetch_withdrawals),
        ]

    async def _rows(self, path: str, since: datetime | None) -> list[dict]:
        params = {"limit": self.settings.page_limit}
        if since is not None:
            params["startTime"] = to_epoch_millis(since)
        body = await self.client.signed_get(path, params)
        return BybitEnvelope.model_validate(body or {}).rows

    async def fetch_deposits(self, since: datetime | None) -> list[Transaction]:
        rows = await self._rows(self.settings.deposit_path, since)
        transactions = []
        for row in rows:
            tx = normalize_bybit_deposit(
                BybitDepositRecord.model_validate(row), self.platform
            )
            if tx is not None:
                transactions.append(tx)
        return transactions

    async def fetch_withdrawals(self, since: datetime | None) -> list[Transaction]:
        rows = await self._rows(self.settings.withdrawal_path, since)
        transactions = []
        for row in rows:
            tx = normalize_bybit_withdrawal(
                BybitWithdrawalRecord.model_validate(row), self.platform
            )
            if tx is not None:
                transactions.append(tx)
        return transactions
