from crypto_ledger.ingestion.adapters.ethereum_plugin.client import EtherscanClient
from crypto_ledger.ingestion.adapters.ethereum_plugin.processor import (
    EthereumWalletProcessor,
)

__all__ = ["EthereumWalletProcessor", "EtherscanClient"]
