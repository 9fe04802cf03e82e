"""TronGrid normalizers: TRC20 token transfers and native TRX transfers.

TronGrid reports token values as integer base units alongside the token's
decimals, e.g. USDT (6 decimals) value "1500000" is 1.5 USDT. Native TRX
amounts are in sun (1 TRX = 1,000,000 sun).
"""

from crypto_ledger.ingestion.schemas.tron import Trc20Transfer, TronTransaction
from crypto_ledger.shared.models.enums import (
    ApiSource,
    TransactionStatus,
    TransactionType,
)
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.normalizers import (
    parse_epoch_millis,
    scale_base_units,
    to_iso,
)

DEFAULT_DECIMALS = 6
NETWORK = "TRC20"
# The same feed carries Approval events, which move no tokens
TRANSFER_EVENT = "Transfer"

TRX_ASSET = "TRX"
TRX_DECIMALS = 6
TRX_NETWORK = "TRON"
TRX_TRANSFER_CONTRACT = "TransferContract"
TRX_SUCCESS = "SUCCESS"


def normalize_tron_transfer(
    transfer: Trc20Transfer, wallet_address: str, platform: str
) -> Transaction | None:
    """Deposit when the transfer's destination is the tracked address."""
    if transfer.type and transfer.type != TRANSFER_EVENT:
        return None
    decimals = transfer.token_info.decimals
    amount = scale_base_units(
        transfer.value, DEFAULT_DECIMALS if decimals is None else decimals
    )
    asset = transfer.token_info.symbol
    if not asset or amount is None or not transfer.transaction_id:
        return None

    is_deposit = transfer.to_address == wallet_address
    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
        asset=asset,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(transfer.block_timestamp)),
        from_address=transfer.from_address or "",
        to_address=transfer.to_address or "",
        tx_id=transfer.transaction_id,
        status=TransactionStatus.COMPLETED,
        network=NETWORK,
        api_source=(
            ApiSource.TRONGRID_DEPOSIT.value
            if is_deposit
            else ApiSource.TRONGRID_WITHDRAWAL.value
        ),
    )


def normalize_trx_transfer(
    transaction: TronTransaction, wallet_address: str, platform: str
) -> Transaction | None:
    """
    Map the first TransferContract of a native transaction.

    Contract calls, freezes, votes and reverted transfers return None.
    """
    contract = next(
        (
            c
            for c in transaction.raw_data.contract
            if c.type == TRX_TRANSFER_CONTRACT
        ),
        None,
    )
    if contract is None or not transaction.tx_id:
        return None
    if any(r.contract_ret and r.contract_ret != TRX_SUCCESS for r in transaction.ret):
        return None

    value = contract.parameter.value
    amount = scale_base_units(value.amount, TRX_DECIMALS)
    if amount is None:
        return None

    is_deposit = value.to_address == wallet_address
    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
        asset=TRX_ASSET,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(transaction.block_timestamp)),
        from_address=value.owner_address or "",
        to_address=value.to_address or "",
        tx_id=transaction.tx_id,
        status=TransactionStatus.COMPLETED,
        network=TRX_NETWORK,
        api_source=(
            ApiSource.TRONGRID_TRX_DEPOSIT.value
            if is_deposit
            else ApiSource.TRONGRID_TRX_WITHDRAWAL.value
        ),
    )
