"""Source-specific normalizers.

- binance.py: P2P orders, Pay transfers, capital deposits and withdrawals
- bybit.py: V5 deposit and withdrawal records
- tron.py: TronGrid TRC20 transfers and native TRX transfers
- ethereum.py: Etherscan normal transactions
- bitcoin.py: Blockstream address transactions

Each function maps one validated raw record to a canonical Transaction,
or returns None when the record has no usable asset, amount or id.
"""

from crypto_ledger.transformation.adapters.binance import (
    normalize_binance_deposit,
    normalize_binance_withdrawal,
    normalize_p2p_order,
    normalize_pay_transaction,
)
from crypto_ledger.transformation.adapters.bitcoin import normalize_btc_transaction
from crypto_ledger.transformation.adapters.bybit import (
    normalize_bybit_deposit,
    normalize_bybit_withdrawal,
)
from crypto_ledger.transformation.adapters.ethereum import normalize_eth_transaction
from crypto_ledger.transformation.adapters.tron import (
    normalize_trx_transfer,
    normalize_tron_transfer,
)

__all__ = [
    "normalize_binance_deposit",
    "normalize_binance_withdrawal",
    "normalize_btc_transaction",
    "normalize_bybit_deposit",
    "normalize_bybit_withdrawal",
    "normalize_eth_transaction",
    "normalize_p2p_order",
    "normalize_pay_transaction",
    "normalize_trx_transfer",
    "normalize_tron_transfer",
]
