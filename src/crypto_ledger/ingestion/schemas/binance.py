# crypto_ledger/ingestion/schemas/binance.py

from typing import Any

from pydantic import AliasChoices, Field, TypeAdapter

from crypto_ledger.ingestion.schemas.base import RawEnvelope, RawRecord


class BinanceP2POrder(RawRecord):
    """One row of /sapi/v1/c2c/orderMatch/listUserOrderHistory."""

    order_number: str | None = Field(
        default=None, validation_alias=AliasChoices("orderNumber", "orderNo", "id")
    )
    trade_type: str | None = Field(default=None, validation_alias="tradeType")
    asset: str | None = Field(default=None, validation_alias=AliasChoices("asset", "coin"))
    amount: str | None = Field(
        default=None, validation_alias=AliasChoices("amount", "totalAmount", "quantity")
    )
    create_time: str | None = Field(
        default=None, validation_alias=AliasChoices("createTime", "orderTime")
    )
    order_status: str | None = Field(
        default=None, validation_alias=AliasChoices("orderStatus", "status")
    )

    @property
    def is_completed(self) -> bool:
        return (self.order_status or "").upper() == "COMPLETED"


class BinanceP2PResponse(RawEnvelope):
    code: str | None = None
    message: str | None = None
    data: list[dict[str, Any]] = Field(
        default_factory=list, validation_alias=AliasChoices("data", "result")
    )
    total: int | None = None


class BinancePayTransaction(RawRecord):
    """One row of /sapi/v1/pay/transactions."""

    transaction_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("transactionId", "id", "txId", "orderId"),
    )
    currency: str | None = Field(
        default=None, validation_alias=AliasChoices("currency", "coin")
    )
    amount: str | None = None
    create_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("createTime", "transactionTime", "insertTime"),
    )
    direction: str | None = None
    type: str | None = None
    status: str | None = None
    order_type: str | None = Field(default=None, validation_alias="orderType")

    @property
    def is_successful(self) -> bool:
        # Pay history rows usually carry no status; only explicit failures are dropped
        if self.status is None:
            return True
        return self.status.upper() in ("SUCCESS", "1")


class BinancePayResponse(RawEnvelope):
    code: str | None = None
    message: str | None = None
    data: list[dict[str, Any]] = Field(
        default_factory=list, validation_alias=AliasChoices("data", "result")
    )
    success: bool | None = None


class BinanceDepositRecord(RawRecord):
    """One row of /sapi/v1/capital/deposit/hisrec."""

    coin: str | None = None
    amount: str | None = None
    insert_time: str | None = Field(default=None, validation_alias="insertTime")
    address: str | None = None
    tx_id: str | None = Field(default=None, validation_alias="txId")
    id: str | None = None
    status: int | None = None
    network: str | None = None


class BinanceWithdrawalRecord(RawRecord):
    """One row of /sapi/v1/capital/withdraw/history."""

    id: str | None = None
    coin: str | None = None
    amount: str | None = None
    apply_time: str | None = Field(default=None, validation_alias="applyTime")
    address: str | None = None
    tx_id: str | None = Field(default=None, validation_alias="txId")
    status: int | None = None
    network: str | None = None


BinanceDepositList = TypeAdapter(list[BinanceDepositRecord])
BinanceWithdrawalList = TypeAdapter(list[BinanceWithdrawalRecord])
