"""Binance account processor: P2P, Pay, deposits, withdrawals."""

from datetime import datetime

from crypto_ledger.config.state import BinanceSettings
from crypto_ledger.ingestion.adapters.binance_plugin.client import BinanceClient
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing.account_processor import (
    BaseAccountProcessor,
    Clock,
    SubEndpoint,
    to_epoch_millis,
)
from crypto_ledger.ingestion.schemas.binance import (
    BinanceDepositList,
    BinanceP2POrder,
    BinanceP2PResponse,
    BinancePayResponse,
    BinancePayTransaction,
    BinanceWithdrawalList,
)
from crypto_ledger.shared.models.accounts import AccountCredential
from crypto_ledger.shared.models.enums import ApiSource, Exchange, SuccessPolicy
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.adapters.binance import (
    normalize_binance_deposit,
    normalize_binance_withdrawal,
    normalize_p2p_order,
    normalize_pay_transaction,
)

P2P_TRADE_TYPES = ("BUY", "SELL")


class BinanceAccountProcessor(BaseAccountProcessor):
    success_policy = SuccessPolicy.EXCHANGE
    exchange = "binance"

    def __init__(
        self,
        credential: AccountCredential,
        settings: BinanceSettings,
        fetcher: Fetcher,
        clock: Clock | None = None,
    ):
        super().__init__(credential.label(Exchange.BINANCE), clock=clock)
        self.settings = settings
        self.client = BinanceClient(credential, settings, fetcher, clock=self.clock)

    def sub_endpoints(self) -> list[SubEndpoint]:
        return [
            SubEndpoint(ApiSource.BINANCE_P2P.value, self.fetch_p2p),
            SubEndpoint(ApiSource.BINANCE_PAY.value, self.fetch_pay),
            SubEndpoint(ApiSource.BINANCE_DEPOSIT.value, self.fetch_deposits),
            SubEndpoint(ApiSource.BINANCE_WITHDRAWAL.value, self.fetch_withdrawals),
        ]

    def _window(self, since: datetime | None, key: str = "startTime") -> dict:
        params = {"limit": self.settings.page_limit}
        if since is not None:
            params[key] = to_epoch_millis(since)
        return params

    async def fetch_p2p(self, since: datetime | None) -> list[Transaction]:
        transactions: list[Transaction] = []
        for trade_type in P2P_TRADE_TYPES:
            params = {
                "tradeType": trade_type,
                "page": 1,
                "rows": self.settings.page_limit,
            }
            if since is not None:
                params["startTimestamp"] = to_epoch_millis(since)

            body = await self.client.signed_get(self.settings.p2p_path, params)
            response = BinanceP2PResponse.model_validate(body or {})
            for row in response.data:
                tx = normalize_p2p_order(
                    BinanceP2POrder.model_validate(row), self.platform, trade_type
                )
                if tx is not None:
                    transactions.append(tx)
        return transactions

    async def fetch_pay(self, since: datetime | None) -> list[Transaction]:
        body = await self.client.signed_get(
            self.settings.pay_path, self._window(since, "startTime")
        )
        response = BinancePayResponse.model_validate(body or {})
        transactions = []
        for row in response.data:
            tx = normalize_pay_transaction(
                BinancePayTransaction.model_validate(row), self.platform
            )
            if tx is not None:
                transactions.append(tx)
        return transactions

    async def fetch_deposits(self, since: datetime | None) -> list[Transaction]:
        body = await self.client.signed_get(
            self.settings.deposit_path, self._window(since)
        )
        records = BinanceDepositList.validate_python(body or [])
        return [
            tx
            for tx in (normalize_binance_deposit(r, self.platform) for r in records)
            if tx is not None
        ]

    async def fetch_withdrawals(self, since: datetime | None) -> list[Transaction]:
        body = await self.client.signed_get(
            self.settings.withdrawal_path, self._window(since)
        )
        records = BinanceWithdrawalList.validate_python(body or [])
        return [
            tx
            for tx in (normalize_binance_withdrawal(r, self.platform) for r in records)
            if tx is not None
        ]
