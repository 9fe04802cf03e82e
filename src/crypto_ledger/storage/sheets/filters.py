"""Pure filtering steps of the sync pipeline: dedup, AED value floor, ordering."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation

from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.storage.sheets.rows import ValuedTransaction


@dataclass
class ValueFilterResult:
    kept: list[ValuedTransaction] = field(default_factory=list)
    rejected: list[ValuedTransaction] = field(default_factory=list)
    unknown_assets: list[str] = field(default_factory=list)


def remove_duplicates(
    transactions: Iterable[Transaction], existing_tx_ids: set[str]
) -> list[Transaction]:
    """Drop transactions whose tx_id is already in the sheet."""
    return [tx for tx in transactions if tx.tx_id.strip() not in existing_tx_ids]


def value_transaction(
    tx: Transaction, prices_aed: Mapping[str, Decimal], default_rate: Decimal
) -> ValuedTransaction:
    rate = prices_aed.get(tx.asset.upper())
    used_default = rate is None
    if rate is None:
        rate = default_rate
    try:
        amount = Decimal(tx.amount)
    except InvalidOperation:
        amount = Decimal(0)
    return ValuedTransaction(
        transaction=tx,
        rate=rate,
        aed_value=amount * rate,
        used_default_rate=used_default,
    )


def filter_by_value(
    transactions: Iterable[Transaction],
    prices_aed: Mapping[str, Decimal],
    min_value_aed: Decimal,
    default_rate: Decimal = Decimal("1.0"),
) -> ValueFilterResult:
    """Split transactions at the AED floor; unknown assets use `default_rate`."""
    result = ValueFilterResult()
    for tx in transactions:
        valued = value_transaction(tx, prices_aed, default_rate)
        if valued.used_default_rate and tx.asset not in result.unknown_assets:
            result.unknown_assets.append(tx.asset)

        if valued.aed_value >= min_value_aed:
            result.kept.append(valued)
        else:
            reason = (
                f"Value {valued.aed_value:.2f} AED < {min_value_aed} AED minimum"
            )
            result.rejected.append(replace(valued, filter_reason=reason))
    return result


def sort_by_timestamp(valued: Iterable[ValuedTransaction]) -> list[ValuedTransaction]:
    """Oldest first; stable for equal timestamps."""
    return sorted(valued, key=lambda v: v.transaction.occurred_at)
