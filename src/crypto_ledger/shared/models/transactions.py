# crypto_ledger/shared/models/transactions.py

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crypto_ledger.shared.models.enums import (
    AccountStatus,
    TransactionStatus,
    TransactionType,
)


class Transaction(BaseModel):
    """
    Canonical transaction record every exchange and wallet source maps into.

    `amount` stays a decimal string with the source's precision; nothing in
    this layer rounds or converts currencies.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    platform: str
    type: TransactionType
    asset: str
    amount: str
    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")
    from_address: str = ""
    to_address: str = ""
    tx_id: str
    status: TransactionStatus
    network: str = ""
    api_source: str

    @field_validator("asset")
    @classmethod
    def asset_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("asset must not be blank")
        return v.strip()

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Identity within one account's result set."""
        return (self.tx_id, self.api_source)

    @property
    def occurred_at(self) -> datetime:
        return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))


class AccountResult(BaseModel):
    """Outcome of processing one account (exchange sub-account or wallet)."""

    platform: str
    success: bool = False
    transactions: list[Transaction] = Field(default_factory=list)
    counts: dict[str, int] = Field(default_factory=dict)
    total_count: int = 0
    error: str | None = None
    errors: dict[str, str] = Field(default_factory=dict)
    region_blocked: bool = False
    note: str | None = None
    status: AccountStatus = AccountStatus.ERROR
    last_sync: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def missing_credentials(cls, platform: str) -> "AccountResult":
        return cls(
            platform=platform,
            success=False,
            error="Missing API credentials",
            status=AccountStatus.MISSING_CREDENTIALS,
        )

    def status_notes(self) -> str:
        """One-line summary for the status surface."""
        if self.status == AccountStatus.MISSING_CREDENTIALS:
            return "Missing credentials"
        breakdown = " + ".join(
            f"{count} {source}" for source, count in self.counts.items()
        )
        notes = f"{breakdown} = {self.total_count} total" if breakdown else ""
        if self.note:
            notes = f"{notes} ({self.note})" if notes else self.note
        if self.error:
            notes = f"{notes}; {self.error}" if notes else self.error
        return notes


class AggregateResult(BaseModel):
    """Merged result over all configured accounts for one request."""

    success: bool
    transactions: list[Transaction] = Field(default_factory=list)
    count: int = 0
    results: dict[str, AccountResult] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error: str | None = None
