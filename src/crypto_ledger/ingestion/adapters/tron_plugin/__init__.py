from crypto_ledger.ingestion.adapters.tron_plugin.client import TronGridClient
from crypto_ledger.ingestion.adapters.tron_plugin.processor import TronWalletProcessor

__all__ = ["TronGridClient", "TronWalletProcessor"]
