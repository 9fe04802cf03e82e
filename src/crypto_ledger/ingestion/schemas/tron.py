# crypto_ledger/ingestion/schemas/tron.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from crypto_ledger.ingestion.schemas.base import RawEnvelope, RawRecord


class TokenInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    symbol: str | None = None
    address: str | None = None
    decimals: int | None = None
    name: str | None = None


class Trc20Transfer(RawRecord):
    """One row of TronGrid /v1/accounts/{address}/transactions/trc20."""

    transaction_id: str | None = None
    from_address: str | None = Field(default=None, validation_alias="from")
    to_address: str | None = Field(default=None, validation_alias="to")
    value: str | None = None
    block_timestamp: str | None = None
    type: str | None = None
    token_info: TokenInfo = Field(default_factory=TokenInfo)


class TronGridResponse(RawEnvelope):
    success: bool | None = None
    data: list[dict[str, Any]] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)


class TransferValue(RawRecord):
    amount: str | None = None
    owner_address: str | None = None
    to_address: str | None = None


class ContractParameter(RawRecord):
    value: TransferValue = Field(default_factory=TransferValue)


class TronContract(RawRecord):
    type: str | None = None
    parameter: ContractParameter = Field(default_factory=ContractParameter)


class TronRawData(RawRecord):
    contract: list[TronContract] = Field(default_factory=list)


class TronResult(RawRecord):
    contract_ret: str | None = Field(default=None, validation_alias="contractRet")


class TronTransaction(RawRecord):
    """One row of TronGrid /v1/accounts/{address}/transactions (visible=true)."""

    tx_id: str | None = Field(default=None, validation_alias="txID")
    block_timestamp: str | None = None
    raw_data: TronRawData = Field(default_factory=TronRawData)
    ret: list[TronResult] = Field(default_factory=list)
