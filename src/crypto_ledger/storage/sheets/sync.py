"""
Spreadsheet projection of an aggregation run.

Pipeline:
    existing TX IDs -> drop duplicates -> AED value floor -> rejected rows to
    RecycleBin -> kept rows oldest-first to FORMATTED_TRANSACTIONS -> account
    status rows to SETTINGS

Existing rows are never modified; only new rows are appended.
"""

from typing import Any

from pydantic import BaseModel, Field

from crypto_ledger.config.state import SheetsConfig
from crypto_ledger.infrastructure.observability import get_storage_logger
from crypto_ledger.shared.models.enums import TransactionType
from crypto_ledger.shared.models.transactions import AggregateResult
from crypto_ledger.storage.ports import ISheetStore
from crypto_ledger.storage.sheets.filters import (
    filter_by_value,
    remove_duplicates,
    sort_by_timestamp,
)
from crypto_ledger.storage.sheets.rows import (
    FORMATTED_HEADERS,
    FORMATTED_SHEET,
    FORMATTED_TX_ID_COLUMN,
    RECYCLE_BIN_HEADERS,
    RECYCLE_BIN_SHEET,
    RECYCLE_BIN_TX_ID_COLUMN,
    SETTINGS_HEADERS,
    SETTINGS_SHEET,
    ValuedTransaction,
    formatted_row,
    recycle_bin_row,
    row_to_dict,
    status_row,
)

logger = get_storage_logger("sheet-sync")


class SyncReport(BaseModel):
    """Counts for one sync, returned by the crypto-to-sheets endpoint."""

    total_raw: int = 0
    total_after_dedup: int = 0
    total_after_filter: int = 0
    duplicates_removed: int = 0
    filtered_out: int = 0
    recycle_bin_saved: int = 0
    deposits_added: int = 0
    withdrawals_added: int = 0
    unknown_currencies: list[str] = Field(default_factory=list)
    status_updated: bool = False


class SheetSync:
    def __init__(self, store: ISheetStore, config: SheetsConfig):
        self.store = store
        self.config = config

    def _tx_ids(self, sheet: str, column: int) -> set[str]:
        ids = set()
        for row in self.store.read_rows(sheet):
            if column < len(row) and row[column] not in (None, ""):
                ids.add(str(row[column]).strip())
        return ids

    def sync(self, aggregate: AggregateResult) -> SyncReport:
        transactions = aggregate.transactions
        report = SyncReport(total_raw=len(transactions))

        existing = self._tx_ids(FORMATTED_SHEET, FORMATTED_TX_ID_COLUMN)
        unique = remove_duplicates(transactions, existing)
        report.total_after_dedup = len(unique)
        report.duplicates_removed = len(transactions) - len(unique)

        filtered = filter_by_value(
            unique,
            self.config.prices_aed,
            self.config.min_value_aed,
            self.config.default_rate_aed,
        )
        report.total_after_filter = len(filtered.kept)
        report.filtered_out = len(filtered.rejected)
        report.unknown_currencies = filtered.unknown_assets
        if filtered.unknown_assets:
            logger.warning(
                "unknown_currencies_default_rate",
                assets=filtered.unknown_assets,
                rate=str(self.config.default_rate_aed),
            )

        report.recycle_bin_saved = self.save_to_recycle_bin(filtered.rejected)

        kept = sort_by_timestamp(filtered.kept)
        if kept:
            self.store.append_rows(
                FORMATTED_SHEET, FORMATTED_HEADERS, [formatted_row(v) for v in kept]
            )
        report.deposits_added = sum(
            1 for v in kept if v.transaction.type == TransactionType.DEPOSIT.value
        )
        report.withdrawals_added = len(kept) - report.deposits_added

        self.update_status(aggregate)
        report.status_updated = True

        logger.info("sheet_sync_completed", **report.model_dump(exclude={"unknown_currencies"}))
        return report

    def save_to_recycle_bin(self, rejected: list[ValuedTransaction]) -> int:
        """Append rejected rows not already in the RecycleBin; returns the count."""
        if not rejected:
            return 0
        existing = self._tx_ids(RECYCLE_BIN_SHEET, RECYCLE_BIN_TX_ID_COLUMN)
        fresh = []
        for valued in rejected:
            tx_id = valued.transaction.tx_id.strip()
            if tx_id and tx_id not in existing:
                existing.add(tx_id)
                fresh.append(valued)
        if not fresh:
            return 0
        return self.store.append_rows(
            RECYCLE_BIN_SHEET, RECYCLE_BIN_HEADERS, [recycle_bin_row(v) for v in fresh]
        )

    def update_status(self, aggregate: AggregateResult) -> None:
        rows = [
            status_row(label, result, self.config.auto_update)
            for label, result in aggregate.results.items()
        ]
        self.store.replace_rows(SETTINGS_SHEET, SETTINGS_HEADERS, rows)

    def read_transactions(self) -> list[dict[str, Any]]:
        rows = [row for row in self.store.read_rows(FORMATTED_SHEET) if row and row[0]]
        return [row_to_dict(row, index) for index, row in enumerate(rows, start=1)]
