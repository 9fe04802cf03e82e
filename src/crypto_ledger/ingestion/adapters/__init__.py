"""Per-source account processors and their REST clients.

- binance_plugin: HMAC-signed SAPI client, P2P/Pay/deposit/withdrawal processor
- bybit_plugin: V5-signed client, deposit/withdrawal processor
- tron_plugin: TronGrid client, TRC20 and native TRX wallet processor
- ethereum_plugin: Etherscan client, native ETH wallet processor
- bitcoin_plugin: Blockstream client, BTC wallet processor
"""

from crypto_ledger.ingestion.adapters.binance_plugin import BinanceAccountProcessor
from crypto_ledger.ingestion.adapters.bitcoin_plugin import BitcoinWalletProcessor
from crypto_ledger.ingestion.adapters.bybit_plugin import BybitAccountProcessor
from crypto_ledger.ingestion.adapters.ethereum_plugin import EthereumWalletProcessor
from crypto_ledger.ingestion.adapters.tron_plugin import TronWalletProcessor

__all__ = [
    "BinanceAccountProcessor",
    "BitcoinWalletProcessor",
    "BybitAccountProcessor",
    "EthereumWalletProcessor",
    "TronWalletProcessor",
]
