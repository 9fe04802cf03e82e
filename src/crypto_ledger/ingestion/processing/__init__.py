from crypto_ledger.ingestion.processing.account_processor import (
    NO_TRANSACTIONS_NOTE,
    REGION_BLOCKED_MESSAGE,
    BaseAccountProcessor,
    BaseWalletProcessor,
    SubEndpoint,
)

__all__ = [
    "BaseAccountProcessor",
    "BaseWalletProcessor",
    "NO_TRANSACTIONS_NOTE",
    "REGION_BLOCKED_MESSAGE",
    "SubEndpoint",
]
