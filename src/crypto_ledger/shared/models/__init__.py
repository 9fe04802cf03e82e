"""Shared domain models."""

from crypto_ledger.shared.models.accounts import AccountCredential, WalletConfig
from crypto_ledger.shared.models.enums import (
    AccountStatus,
    ApiSource,
    Exchange,
    SuccessPolicy,
    TransactionStatus,
    TransactionType,
    WalletChain,
)
from crypto_ledger.shared.models.transactions import (
    AccountResult,
    AggregateResult,
    Transaction,
)

__all__ = [
    # Enums
    "AccountStatus",
    "ApiSource",
    "Exchange",
    "SuccessPolicy",
    "TransactionStatus",
    "TransactionType",
    "WalletChain",
    # Models
    "AccountCredential",
    "WalletConfig",
    "Transaction",
    "AccountResult",
    "AggregateResult",
]
