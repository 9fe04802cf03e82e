from crypto_ledger.ingestion.adapters.binance_plugin.client import BinanceClient
from crypto_ledger.ingestion.adapters.binance_plugin.processor import (
    BinanceAccountProcessor,
)

__all__ = ["BinanceAccountProcessor", "BinanceClient"]
