"""Per-endpoint schemas for raw exchange and explorer payloads."""

from crypto_ledger.ingestion.schemas.binance import (
    BinanceDepositList,
    BinanceDepositRecord,
    BinanceP2POrder,
    BinanceP2PResponse,
    BinancePayResponse,
    BinancePayTransaction,
    BinanceWithdrawalList,
    BinanceWithdrawalRecord,
)
from crypto_ledger.ingestion.schemas.bitcoin import (
    BlockstreamTransaction,
    BlockstreamTransactionList,
)
from crypto_ledger.ingestion.schemas.bybit import (
    BybitDepositRecord,
    BybitEnvelope,
    BybitWithdrawalRecord,
)
from crypto_ledger.ingestion.schemas.ethereum import (
    EtherscanResponse,
    EtherscanTransaction,
)
from crypto_ledger.ingestion.schemas.tron import (
    Trc20Transfer,
    TronGridResponse,
    TronTransaction,
)

__all__ = [
    "BinanceDepositList",
    "BinanceDepositRecord",
    "BinanceP2POrder",
    "BinanceP2PResponse",
    "BinancePayResponse",
    "BinancePayTransaction",
    "BinanceWithdrawalList",
    "BinanceWithdrawalRecord",
    "BlockstreamTransaction",
    "BlockstreamTransactionList",
    "BybitDepositRecord",
    "BybitEnvelope",
    "BybitWithdrawalRecord",
    "EtherscanResponse",
    "EtherscanTransaction",
    "Trc20Transfer",
    "TronGridResponse",
    "TronTransaction",
]
