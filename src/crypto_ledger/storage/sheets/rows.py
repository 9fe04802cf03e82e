"""Row layouts for the FORMATTED_TRANSACTIONS, RecycleBin and SETTINGS sheets."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from crypto_ledger.shared.models.enums import AccountStatus
from crypto_ledger.shared.models.transactions import AccountResult, Transaction

FORMATTED_SHEET = "FORMATTED_TRANSACTIONS"
RECYCLE_BIN_SHEET = "RecycleBin"
SETTINGS_SHEET = "SETTINGS"

FORMATTED_HEADERS = [
    "Date & Time",
    "Platform",
    "Type",
    "Asset",
    "Amount",
    "AED Value",
    "Rate",
    "Client",
    "Remarks",
    "From Address",
    "To Address",
    "TX ID",
]
FORMATTED_TX_ID_COLUMN = 11

RECYCLE_BIN_HEADERS = [
    "Date & Time",
    "Platform",
    "Type",
    "Asset",
    "Amount",
    "Calculated AED",
    "Used Default Rate",
    "Filter Reason",
    "From Address",
    "To Address",
    "TX ID",
    "Status",
    "Network",
]
RECYCLE_BIN_TX_ID_COLUMN = 10

SETTINGS_HEADERS = ["Platform", "API Status", "Last Sync", "Auto-Update", "Notes"]

# Network shown for rows read back from the sheet, which has no network column
ASSET_NETWORKS = {
    "BTC": "BTC",
    "ETH": "ETH",
    "USDT": "TRC20",
    "TRX": "TRON",
    "SOL": "SOL",
    "BNB": "BEP20",
}


@dataclass(frozen=True)
class ValuedTransaction:
    """A transaction with its AED valuation attached."""

    transaction: Transaction
    rate: Decimal
    aed_value: Decimal
    used_default_rate: bool
    filter_reason: str | None = None


def format_timestamp(value: str | datetime) -> str:
    """'YYYY-MM-DD HH:MM' in UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")


def format_amount(amount: str) -> str:
    try:
        return f"{Decimal(amount):.8f}"
    except InvalidOperation:
        return amount


def formatted_row(valued: ValuedTransaction) -> list[str]:
    tx = valued.transaction
    return [
        format_timestamp(tx.timestamp),
        tx.platform,
        tx.type,
        tx.asset,
        format_amount(tx.amount),
        f"{valued.aed_value:.2f}",
        str(valued.rate),
        "",
        "",
        tx.from_address,
        tx.to_address,
        tx.tx_id,
    ]


def recycle_bin_row(valued: ValuedTransaction) -> list[str]:
    tx = valued.transaction
    return [
        format_timestamp(tx.timestamp),
        tx.platform,
        tx.type,
        tx.asset,
        format_amount(tx.amount),
        f"{valued.aed_value:.2f}",
        "YES" if valued.used_default_rate else "NO",
        valued.filter_reason or "Unknown",
        tx.from_address,
        tx.to_address,
        tx.tx_id,
        tx.status,
        tx.network,
    ]


def status_row(label: str, result: AccountResult, auto_update: str) -> list[str]:
    return [
        label,
        AccountStatus(result.status).value,
        format_timestamp(result.last_sync),
        auto_update,
        result.status_notes(),
    ]


def _cell(row: list[Any], index: int, default: str = "") -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return default


def row_to_dict(row: list[Any], row_id: int) -> dict[str, Any]:
    """Shape one FORMATTED_TRANSACTIONS row for API consumers."""
    asset = _cell(row, 3)
    return {
        "id": row_id,
        "timestamp": _cell(row, 0),
        "platform": _cell(row, 1),
        "type": _cell(row, 2).lower(),
        "asset": asset,
        "amount": _cell(row, 4, "0"),
        "amount_aed": "".join(
            ch for ch in _cell(row, 5, "0") if ch.isdigit() or ch in ".-"
        )
        or "0",
        "rate": _cell(row, 6, "0"),
        "client": _cell(row, 7),
        "remarks": _cell(row, 8),
        "from_address": _cell(row, 9),
        "to_address": _cell(row, 10),
        "tx_id": _cell(row, 11),
        "status": "Completed",
        "network": ASSET_NETWORKS.get(asset, "Unknown"),
    }
