"""
Shared enumerations for crypto-ledger.

Separates WHERE a record came from (Exchange, WalletChain, ApiSource) from
WHAT it is (TransactionType, TransactionStatus) and how an account is
reported (AccountStatus).
"""

import enum


class Exchange(str, enum.Enum):
    """Exchange families with signed REST APIs. Values are display names."""

    BINANCE = "Binance"
    BYBIT = "ByBit"


class WalletChain(str, enum.Enum):
    """Blockchains a tracked wallet address can live on."""

    TRON = "tron"
    ETHEREUM = "ethereum"
    BITCOIN = "bitcoin"


class TransactionType(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, enum.Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


class AccountStatus(str, enum.Enum):
    """Per-account status shown on the status surface (SETTINGS sheet)."""

    ACTIVE = "Active"
    ERROR = "Error"
    MISSING_CREDENTIALS = "Missing Credentials"


class ApiSource(str, enum.Enum):
    """Sub-endpoint that produced a canonical transaction."""

    BINANCE_P2P = "Binance_P2P"
    BINANCE_PAY = "Binance_Pay"
    BINANCE_DEPOSIT = "Binance_Deposit"
    BINANCE_WITHDRAWAL = "Binance_Withdrawal"
    BYBIT_DEPOSIT = "ByBit_Deposit"
    BYBIT_WITHDRAWAL = "ByBit_Withdrawal"
    TRONGRID_DEPOSIT = "TronGrid_TRC20_Deposit"
    TRONGRID_WITHDRAWAL = "TronGrid_TRC20_Withdrawal"
    TRONGRID_TRX_DEPOSIT = "TronGrid_TRX_Deposit"
    TRONGRID_TRX_WITHDRAWAL = "TronGrid_TRX_Withdrawal"
    ETHERSCAN = "Etherscan_ETH"
    BLOCKSTREAM = "Blockstream_BTC"


class SuccessPolicy(str, enum.Enum):
    """
    How an account result decides `success` once all sub-endpoints ran.

    EXCHANGE: at least one transaction, or no sub-endpoint reported an error.
    WALLET: always successful; errors are still recorded and reflected in status.
    """

    EXCHANGE = "exchange"
    WALLET = "wallet"
