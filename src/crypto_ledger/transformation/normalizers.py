"""Shared helpers for the per-source normalizers.

Provides:
- NormalizationError: raised when a record cannot be mapped at all
- Timestamp parsing for epoch seconds, epoch milliseconds and exchange date strings
- Amount helpers that keep exchange precision as a decimal string

Each source (Binance, ByBit, TronGrid, Etherscan, Blockstream) has its own
module under `transformation.adapters` built on these helpers.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, localcontext

from crypto_ledger.ingestion.exceptions import LedgerError

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class NormalizationError(LedgerError):
    """Raised when normalization of raw data fails."""

    pass


def parse_epoch_millis(value: str | int | None) -> datetime:
    """Parse a Unix millisecond timestamp into an aware UTC datetime.

    Raises:
        NormalizationError: If the value is missing or not an integer
    """
    if value is None or str(value).strip() == "":
        raise NormalizationError("Missing timestamp")
    try:
        millis = int(str(value).strip())
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise NormalizationError(f"Malformed timestamp: {value!r}") from e


def parse_epoch_seconds(value: str | int | None) -> datetime:
    """Parse a Unix second timestamp (Etherscan, Blockstream).

    Raises:
        NormalizationError: If the value is missing or not an integer
    """
    if value is None or str(value).strip() == "":
        raise NormalizationError("Missing timestamp")
    try:
        return datetime.fromtimestamp(int(str(value).strip()), tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise NormalizationError(f"Malformed timestamp: {value!r}") from e


def parse_datetime_string(value: str | None) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS' (UTC) as returned by Binance withdraw history.

    Raises:
        NormalizationError: If the value is missing or malformed
    """
    if not value:
        raise NormalizationError("Missing timestamp")
    try:
        return datetime.strptime(value.strip(), DATETIME_FORMAT).replace(
            tzinfo=timezone.utc
        )
    except ValueError as e:
        raise NormalizationError(f"Malformed timestamp: {value!r}") from e


def to_iso(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def clean_amount(value: str | None) -> str | None:
    """Return the exchange-supplied amount magnitude, or None when unusable.

    The string is kept as supplied (no rounding); a leading sign is dropped
    since direction is carried by the transaction type.
    """
    if value is None:
        return None
    text = value.strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return text.lstrip("+-")


def is_negative(value: str | None) -> bool:
    if not value:
        return False
    try:
        return Decimal(value.strip()) < 0
    except InvalidOperation:
        return False


def scale_base_units(value: str | None, decimals: int) -> str | None:
    """Convert integer base units to a plain decimal string (1500000, 6 -> '1.5')."""
    if value is None:
        return None
    try:
        units = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not units.is_finite():
        return None
    # scaleb and normalize round to the context precision; 256-bit token
    # values carry up to 78 digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(units.as_tuple().digits))
        normalized = units.scaleb(-decimals).normalize()
    return format(normalized, "f")


def first_present(*values: str | None) -> str | None:
    for value in values:
        if value is not None and str(value).strip():
            return value
    return None
