# crypto_ledger/ingestion/schemas/bybit.py

from typing import Any

from pydantic import Field

from crypto_ledger.ingestion.schemas.base import RawEnvelope, RawRecord


class BybitResult(RawEnvelope):
    rows: list[dict[str, Any]] = Field(default_factory=list)
    next_page_cursor: str | None = Field(default=None, validation_alias="nextPageCursor")


class BybitEnvelope(RawEnvelope):
    """V5 response envelope: retCode 0 means success."""

    ret_code: int | None = Field(default=None, validation_alias="retCode")
    ret_msg: str | None = Field(default=None, validation_alias="retMsg")
    result: BybitResult | None = None

    @property
    def rows(self) -> list[dict[str, Any]]:
        return self.result.rows if self.result else []


class BybitDepositRecord(RawRecord):
    """One row of /v5/asset/deposit/query-record."""

    coin: str | None = None
    chain: str | None = None
    amount: str | None = None
    tx_id: str | None = Field(default=None, validation_alias="txID")
    id: str | None = None
    status: str | None = None
    to_address: str | None = Field(default=None, validation_alias="toAddress")
    from_address: str | None = Field(default=None, validation_alias="fromAddress")
    success_at: str | None = Field(default=None, validation_alias="successAt")


class BybitWithdrawalRecord(RawRecord):
    """One row of /v5/asset/withdraw/query-record."""

    coin: str | None = None
    chain: str | None = None
    amount: str | None = None
    tx_id: str | None = Field(default=None, validation_alias="txID")
    withdraw_id: str | None = Field(default=None, validation_alias="withdrawId")
    id: str | None = None
    status: str | None = None
    to_address: str | None = Field(default=None, validation_alias="toAddress")
    create_time: str | None = Field(default=None, validation_alias="createTime")
