"""Etherscan normal-transaction normalizer.

Values are in wei (1 ETH = 10**18 wei). Contract calls that move no ether
and transactions that reverted are skipped.
"""

from crypto_ledger.ingestion.schemas.ethereum import EtherscanTransaction
from crypto_ledger.shared.models.enums import (
    ApiSource,
    TransactionStatus,
    TransactionType,
)
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.normalizers import (
    parse_epoch_seconds,
    scale_base_units,
    to_iso,
)

ETH_ASSET = "ETH"
ETH_DECIMALS = 18
NETWORK = "ETH"


def normalize_eth_transaction(
    transaction: EtherscanTransaction, wallet_address: str, platform: str
) -> Transaction | None:
    """Deposit when the recipient is the tracked address (case-insensitive)."""
    if transaction.is_error == "1" or transaction.txreceipt_status == "0":
        return None
    amount = scale_base_units(transaction.value, ETH_DECIMALS)
    if amount is None or amount == "0" or not transaction.hash:
        return None

    is_deposit = (transaction.to_address or "").lower() == wallet_address.lower()
    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
        asset=ETH_ASSET,
        amount=amount,
        timestamp=to_iso(parse_epoch_seconds(transaction.time_stamp)),
        from_address=transaction.from_address or "",
        to_address=transaction.to_address or transaction.contract_address or "",
        tx_id=transaction.hash,
        status=TransactionStatus.COMPLETED,
        network=NETWORK,
        api_source=ApiSource.ETHERSCAN.value,
    )
