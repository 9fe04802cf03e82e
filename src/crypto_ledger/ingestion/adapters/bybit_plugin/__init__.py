from crypto_ledger.ingestion.adapters.bybit_plugin.client import BybitClient
from crypto_ledger.ingestion.adapters.bybit_plugin.processor import (
    BybitAccountProcessor,
)

__all__ = ["BybitAccountProcessor", "BybitClient"]
