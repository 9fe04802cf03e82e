# crypto_ledger/ingestion/schemas/ethereum.py

from typing import Any

from pydantic import Field

from crypto_ledger.ingestion.schemas.base import RawEnvelope, RawRecord


class EtherscanTransaction(RawRecord):
    """One row of Etherscan `module=account&action=txlist`."""

    hash: str | None = None
    time_stamp: str | None = Field(default=None, validation_alias="timeStamp")
    from_address: str | None = Field(default=None, validation_alias="from")
    to_address: str | None = Field(default=None, validation_alias="to")
    value: str | None = None
    is_error: str | None = Field(default=None, validation_alias="isError")
    txreceipt_status: str | None = None
    contract_address: str | None = Field(default=None, validation_alias="contractAddress")


class EtherscanResponse(RawEnvelope):
    """`result` is a list of rows on success and an error string otherwise."""

    status: str | None = None
    message: str | None = None
    result: list[dict[str, Any]] | str = Field(default_factory=list)

    @property
    def rows(self) -> list[dict[str, Any]]:
        return self.result if isinstance(self.result, list) else []
