from crypto_ledger.ingestion.adapters.bitcoin_plugin.client import BlockstreamClient
from crypto_ledger.ingestion.adapters.bitcoin_plugin.processor import (
    BitcoinWalletProcessor,
)

__all__ = ["BitcoinWalletProcessor", "BlockstreamClient"]
