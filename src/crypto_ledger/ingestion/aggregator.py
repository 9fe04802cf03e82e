"""
Transaction aggregation across every configured account.

Accounts run sequentially: Binance accounts, then ByBit accounts, then
wallets (TRON, Ethereum or Bitcoin), each group in configuration order. The merged transaction list
keeps that order (and sub-endpoint order within an account); it is never
re-sorted by timestamp here.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from crypto_ledger.config.state import ConfigState
from crypto_ledger.infrastructure.observability import get_processing_logger
from crypto_ledger.ingestion.adapters.binance_plugin import BinanceAccountProcessor
from crypto_ledger.ingestion.adapters.bitcoin_plugin import BitcoinWalletProcessor
from crypto_ledger.ingestion.adapters.bybit_plugin import BybitAccountProcessor
from crypto_ledger.ingestion.adapters.ethereum_plugin import EthereumWalletProcessor
from crypto_ledger.ingestion.adapters.tron_plugin import TronWalletProcessor
from crypto_ledger.ingestion.exceptions import AggregateError
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.ports.http import IHttpClient
from crypto_ledger.ingestion.processing.account_processor import (
    BaseAccountProcessor,
    Clock,
    utc_now,
)
from crypto_ledger.shared.models.accounts import AccountCredential, WalletConfig
from crypto_ledger.shared.models.enums import Exchange, WalletChain
from crypto_ledger.shared.models.transactions import AccountResult, AggregateResult

logger = get_processing_logger("aggregator")

ADDRESS_PATTERNS = {
    WalletChain.TRON: ("TRON", re.compile(r"^T[1-9A-HJ-NP-Za-km-z]{33}$")),
    WalletChain.ETHEREUM: ("Ethereum", re.compile(r"^0x[0-9a-fA-F]{40}$")),
    WalletChain.BITCOIN: (
        "Bitcoin",
        re.compile(r"^(bc1[02-9ac-hj-np-z]{6,87}|[13][1-9A-HJ-NP-Za-km-z]{25,34})$"),
    ),
}
# Keys and secrets travel in headers and HMAC input; printable ASCII only
CREDENTIAL_PATTERN = re.compile(r"^[\x21-\x7e]*$")


def check_credential(label: str, credential: AccountCredential) -> None:
    """
    Raises:
        AggregateError: Key or secret contains whitespace or non-ASCII characters
    """
    for field in ("api_key", "api_secret"):
        if not CREDENTIAL_PATTERN.match(getattr(credential, field)):
            raise AggregateError(f"Malformed {field} for {label}")


def check_address(wallet: WalletConfig) -> None:
    """
    Raises:
        AggregateError: Address does not match its chain's format
    """
    name, pattern = ADDRESS_PATTERNS[WalletChain(wallet.chain)]
    if not pattern.match(wallet.address):
        raise AggregateError(
            f"Malformed {name} address for {wallet.label}: {wallet.address!r}"
        )


@dataclass(frozen=True)
class PlannedAccount:
    """One account slot; `processor` is None when credentials are missing."""

    label: str
    processor: BaseAccountProcessor | None


class TransactionAggregator:
    """Runs account processors for a ConfigState and merges their results."""

    def __init__(
        self,
        config: ConfigState,
        http_client: IHttpClient,
        clock: Clock | None = None,
    ):
        self.config = config
        self.fetcher = Fetcher(http_client)
        self.clock = clock or utc_now

    def plan(self) -> list[PlannedAccount]:
        """
        Build the ordered account list.

        Raises:
            AggregateError: Duplicate labels, malformed credentials or a
                malformed wallet address
        """
        planned: list[PlannedAccount] = []

        for credential in self.config.binance_accounts:
            label = credential.label(Exchange.BINANCE)
            check_credential(label, credential)
            processor = (
                BinanceAccountProcessor(
                    credential, self.config.binance, self.fetcher, clock=self.clock
                )
                if credential.has_credentials
                else None
            )
            planned.append(PlannedAccount(label, processor))

        for credential in self.config.bybit_accounts:
            label = credential.label(Exchange.BYBIT)
            check_credential(label, credential)
            processor = (
                BybitAccountProcessor(
                    credential, self.config.bybit, self.fetcher, clock=self.clock
                )
                if credential.has_credentials
                else None
            )
            planned.append(PlannedAccount(label, processor))

        for wallet in self.config.wallets:
            check_address(wallet)
            planned.append(PlannedAccount(wallet.label, self._wallet_processor(wallet)))

        labels = [account.label for account in planned]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise AggregateError(f"Duplicate account labels: {', '.join(duplicates)}")

        return planned

    def _wallet_processor(self, wallet: WalletConfig) -> BaseAccountProcessor:
        chain = WalletChain(wallet.chain)
        if chain == WalletChain.ETHEREUM:
            return EthereumWalletProcessor(
                wallet, self.config.ethereum, self.fetcher, clock=self.clock
            )
        elif chain == WalletChain.BITCOIN:
            return BitcoinWalletProcessor(
                wallet, self.config.bitcoin, self.fetcher, clock=self.clock
            )
        return TronWalletProcessor(
            wallet, self.config.tron, self.fetcher, clock=self.clock
        )

    async def aggregate(self, since: datetime | None = None) -> AggregateResult:
        """
        Fetch every configured account once.

        Returns:
            AggregateResult; on AggregateError `success` is False, `error`
            carries the message and no partial results are included.
        """
        try:
            planned = self.plan()
        except AggregateError as e:
            logger.error("aggregation_aborted", error=str(e))
            return AggregateResult(success=False, error=str(e), timestamp=self.clock())

        result = AggregateResult(success=True, timestamp=self.clock())
        for account in planned:
            if account.processor is None:
                logger.warning("missing_credentials", account=account.label)
                account_result = AccountResult.missing_credentials(account.label)
                account_result.last_sync = self.clock()
            else:
                account_result = await account.processor.process(since)

            result.results[account.label] = account_result
            result.transactions.extend(account_result.transactions)

        result.count = len(result.transactions)
        logger.info(
            "aggregation_completed",
            accounts=len(planned),
            count=result.count,
            failed=[
                label for label, r in result.results.items() if not r.success
            ],
        )
        return result
