# crypto_ledger/ingestion/schemas/bitcoin.py

from pydantic import Field, TypeAdapter

from crypto_ledger.ingestion.schemas.base import RawRecord


class BlockstreamStatus(RawRecord):
    confirmed: bool = False
    block_time: str | None = None


class BlockstreamOutput(RawRecord):
    scriptpubkey_address: str | None = None
    value: str | None = None


class BlockstreamInput(RawRecord):
    """`prevout` is null for coinbase inputs."""

    prevout: BlockstreamOutput | None = None


class BlockstreamTransaction(RawRecord):
    """One element of Esplora GET /address/{address}/txs."""

    txid: str | None = None
    status: BlockstreamStatus = Field(default_factory=BlockstreamStatus)
    vin: list[BlockstreamInput] = Field(default_factory=list)
    vout: list[BlockstreamOutput] = Field(default_factory=list)


BlockstreamTransactionList = TypeAdapter(list[BlockstreamTransaction])
