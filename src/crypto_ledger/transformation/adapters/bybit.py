"""ByBit V5 normalizers for on-chain deposit and withdrawal records."""

from crypto_ledger.ingestion.schemas.bybit import (
    BybitDepositRecord,
    BybitWithdrawalRecord,
)
from crypto_ledger.shared.models.enums import (
    ApiSource,
    TransactionStatus,
    TransactionType,
)
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.normalizers import (
    clean_amount,
    first_present,
    parse_epoch_millis,
    to_iso,
)

EXTERNAL = "External"

# Deposit status 3 is "success"; withdrawals report the literal "success"
DEPOSIT_SUCCESS = "3"
WITHDRAWAL_SUCCESS = "success"


def normalize_bybit_deposit(
    deposit: BybitDepositRecord, platform: str
) -> Transaction | None:
    amount = clean_amount(deposit.amount)
    tx_id = first_present(deposit.tx_id, deposit.id)
    if not deposit.coin or amount is None or not tx_id:
        return None

    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT,
        asset=deposit.coin,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(deposit.success_at)),
        from_address=deposit.from_address or EXTERNAL,
        to_address=platform,
        tx_id=tx_id,
        status=(
            TransactionStatus.COMPLETED
            if deposit.status == DEPOSIT_SUCCESS
            else TransactionStatus.PENDING
        ),
        network=deposit.chain or "",
        api_source=ApiSource.BYBIT_DEPOSIT.value,
    )


def normalize_bybit_withdrawal(
    withdrawal: BybitWithdrawalRecord, platform: str
) -> Transaction | None:
    amount = clean_amount(withdrawal.amount)
    # txID stays empty until the withdrawal is broadcast
    tx_id = first_present(withdrawal.tx_id, withdrawal.withdraw_id, withdrawal.id)
    if not withdrawal.coin or amount is None or not tx_id:
        return None

    return Transaction(
        platform=platform,
        type=TransactionType.WITHDRAWAL,
        asset=withdrawal.coin,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(withdrawal.create_time)),
        from_address=platform,
        to_address=withdrawal.to_address or EXTERNAL,
        tx_id=tx_id,
        status=(
            TransactionStatus.COMPLETED
            if (withdrawal.status or "").lower() == WITHDRAWAL_SUCCESS
            else TransactionStatus.PENDING
        ),
        network=withdrawal.chain or "",
        api_source=ApiSource.BYBIT_WITHDRAWAL.value,
    )
