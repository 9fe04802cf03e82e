"""
Account processing: run every sub-endpoint of one account and collect what
succeeded.

Each sub-endpoint (P2P, Pay, deposits, ...) is fetched and normalized in its
own failure boundary. An error is recorded under the sub-endpoint's
api_source and the next sub-endpoint still runs. HTTP 451 is recorded with
a distinct region-block message so callers can tell "blocked" from "broken".
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from crypto_ledger.infrastructure.observability import get_ingestion_logger
from crypto_ledger.ingestion.exceptions import LedgerError, RegionBlockedError
from crypto_ledger.shared.models.accounts import WalletConfig
from crypto_ledger.shared.models.enums import AccountStatus, SuccessPolicy
from crypto_ledger.shared.models.transactions import AccountResult, Transaction

REGION_BLOCKED_MESSAGE = "Region blocked (HTTP 451)"
NO_TRANSACTIONS_NOTE = "No transactions returned"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_millis(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


@dataclass(frozen=True)
class SubEndpoint:
    """One independently fetched source of transactions within an account."""

    api_source: str
    fetch: Callable[[datetime | None], Awaitable[list[Transaction]]]


class BaseAccountProcessor(ABC):
    """
    Template for exchange and wallet account processors.

    Subclasses declare their sub-endpoints in order; `process()` runs them
    sequentially and builds a fresh AccountResult.
    """

    success_policy: SuccessPolicy = SuccessPolicy.EXCHANGE
    exchange: str = ""

    def __init__(self, platform: str, clock: Clock | None = None):
        self.platform = platform
        self.clock = clock or utc_now
        self.logger = get_ingestion_logger(
            "account-processor", exchange=self.exchange or None, account=platform
        )

    @abstractmethod
    def sub_endpoints(self) -> list[SubEndpoint]:
        """Ordered sub-endpoints for this account."""
        ...

    def effective_since(self, since: datetime | None) -> datetime | None:
        """Lower time bound applied to every sub-endpoint. None means no bound."""
        return since

    async def process(self, since: datetime | None = None) -> AccountResult:
        if since is not None and since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        since = self.effective_since(since)
        result = AccountResult(platform=self.platform)
        seen: set[tuple[str, str]] = set()

        for sub in self.sub_endpoints():
            result.counts[sub.api_source] = 0
            try:
                transactions = await sub.fetch(since)
            except RegionBlockedError as e:
                result.errors[sub.api_source] = REGION_BLOCKED_MESSAGE
                result.region_blocked = True
                self.logger.warning(
                    "sub_endpoint_region_blocked",
                    api_source=sub.api_source,
                    endpoint=e.endpoint,
                )
                continue
            except LedgerError as e:
                result.errors[sub.api_source] = str(e)
                self.logger.warning(
                    "sub_endpoint_failed", api_source=sub.api_source, error=str(e)
                )
                continue
            except ValidationError as e:
                message = f"Unexpected response shape ({e.error_count()} errors)"
                result.errors[sub.api_source] = message
                self.logger.warning(
                    "sub_endpoint_failed", api_source=sub.api_source, error=message
                )
                continue
            except Exception as e:
                result.errors[sub.api_source] = f"Unexpected error: {e}"
                self.logger.exception(
                    "sub_endpoint_crashed", api_source=sub.api_source
                )
                continue

            added = 0
            for tx in transactions:
                if since is not None and tx.occurred_at < since:
                    continue
                if tx.dedup_key in seen:
                    continue
                seen.add(tx.dedup_key)
                result.transactions.append(tx)
                result.counts[tx.api_source] = result.counts.get(tx.api_source, 0) + 1
                added += 1

            self.logger.debug(
                "sub_endpoint_completed", api_source=sub.api_source, count=added
            )

        return self._finalize(result)

    def _finalize(self, result: AccountResult) -> AccountResult:
        result.total_count = len(result.transactions)
        reachable = result.total_count > 0 or not result.errors

        if self.success_policy == SuccessPolicy.WALLET:
            result.success = True
        else:
            result.success = reachable

        result.status = AccountStatus.ACTIVE if reachable else AccountStatus.ERROR
        if result.errors:
            result.error = "; ".join(
                f"{source}: {message}" for source, message in result.errors.items()
            )
        if result.total_count == 0 and not result.errors:
            result.note = NO_TRANSACTIONS_NOTE
        result.last_sync = self.clock()

        self.logger.info(
            "account_processed",
            success=result.success,
            total_count=result.total_count,
            errors=len(result.errors),
            region_blocked=result.region_blocked,
        )
        return result


class BaseWalletProcessor(BaseAccountProcessor):
    """
    On-chain wallet template.

    Wallets report success unconditionally (WALLET policy); sub-endpoint
    errors are still recorded and drive the account status. Without an
    explicit `since`, only the wallet's lookback window is kept.
    """

    success_policy = SuccessPolicy.WALLET

    def __init__(self, wallet: WalletConfig, clock: Clock | None = None):
        super().__init__(wallet.label, clock=clock)
        self.wallet = wallet

    def effective_since(self, since: datetime | None) -> datetime | None:
        if since is not None:
            return since
        return self.clock() - timedelta(days=self.wallet.lookback_days)
