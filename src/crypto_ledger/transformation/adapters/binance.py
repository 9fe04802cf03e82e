"""Binance-specific normalizers for P2P, Pay and capital deposit/withdrawal records.

Binance returns four unrelated record shapes for money moving in and out of
an account:

    P2P order:   {"orderNumber": "123", "tradeType": "BUY", "asset": "BTC",
                  "amount": "0.5", "createTime": 1700000000000,
                  "orderStatus": "COMPLETED"}
    Pay row:     {"transactionId": "9", "currency": "USDT", "amount": "-10",
                  "transactionTime": 1700000000000}
    Deposit:     {"coin": "USDT", "amount": "25", "insertTime": 1700000000000,
                  "status": 1, "txId": "0xabc", "network": "TRX"}
    Withdrawal:  {"id": "w1", "coin": "USDT", "amount": "25",
                  "applyTime": "2023-11-14 22:13:20", "status": 6}

Every function returns None for records with no usable asset, amount or id.
"""

from crypto_ledger.ingestion.schemas.binance import (
    BinanceDepositRecord,
    BinanceP2POrder,
    BinancePayTransaction,
    BinanceWithdrawalRecord,
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
    is_negative,
    parse_datetime_string,
    parse_epoch_millis,
    to_iso,
)

P2P_COUNTERPARTY = "P2P User"
PAY_COUNTERPARTY = "Binance Pay User"
EXTERNAL = "External"

DEPOSIT_COMPLETED = 1
WITHDRAWAL_COMPLETED = 6


def normalize_p2p_order(
    order: BinanceP2POrder, platform: str, trade_type: str | None = None
) -> Transaction | None:
    """Map a completed C2C order. BUY is a deposit into the account, SELL a withdrawal."""
    side = (order.trade_type or trade_type or "").upper()
    amount = clean_amount(order.amount)
    if not order.asset or amount is None or not order.order_number:
        return None
    if not order.is_completed or side not in ("BUY", "SELL"):
        return None

    is_deposit = side == "BUY"
    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
        asset=order.asset,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(order.create_time)),
        from_address=P2P_COUNTERPARTY if is_deposit else platform,
        to_address=platform if is_deposit else P2P_COUNTERPARTY,
        tx_id=f"P2P_{order.order_number}",
        status=TransactionStatus.COMPLETED,
        network="P2P",
        api_source=ApiSource.BINANCE_P2P.value,
    )


def _pay_is_deposit(tx: BinancePayTransaction) -> bool:
    if tx.direction:
        return tx.direction.upper() == "IN"
    if tx.type:
        return tx.type.lower() == "deposit"
    return not is_negative(tx.amount)


def normalize_pay_transaction(
    tx: BinancePayTransaction, platform: str
) -> Transaction | None:
    """Map a successful Binance Pay transfer; direction from IN/OUT, else amount sign."""
    amount = clean_amount(tx.amount)
    if not tx.currency or amount is None or not tx.transaction_id:
        return None
    if not tx.is_successful:
        return None

    is_deposit = _pay_is_deposit(tx)
    return Transaction(
        platform=platform,
        type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
        asset=tx.currency,
        amount=amount,
        timestamp=to_iso(parse_epoch_millis(tx.create_time)),
        from_address=PAY_COUNTERPARTY if is_deposit else platform,
        to_address=platform if is_deposit else PAY_COUNTERPARTY,
        tx_id=f"PAY_{tx.transaction_id}",
        status=TransactionStatus.COMPLETED,
        network="Binance Pay",
        api_source=ApiSource.BINANCE_PAY.value,
    )


def normalize_binance_deposit(
    deposit: BinanceDepositRecord, platform: str
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
        timestamp=to_iso(parse_epoch_millis(deposit.insert_time)),
        from_address=deposit.address or EXTERNAL,
        to_address=platform,
        tx_id=tx_id,
        status=(
            TransactionStatus.COMPLETED
            if deposit.status == DEPOSIT_COMPLETED
            else TransactionStatus.PENDING
        ),
        network=deposit.network or "",
        api_source=ApiSource.BINANCE_DEPOSIT.value,
    )


def normalize_binance_withdrawal(
    withdrawal: BinanceWithdrawalRecord, platform: str
) -> Transaction | None:
    amount = clean_amount(withdrawal.amount)
    tx_id = first_present(withdrawal.tx_id, withdrawal.id)
    if not withdrawal.coin or amount is None or not tx_id:
        return None

    return Transaction(
        platform=platform,
        type=TransactionType.WITHDRAWAL,
        asset=withdrawal.coin,
        amount=amount,
        timestamp=to_iso(parse_datetime_string(withdrawal.apply_time)),
        from_address=platform,
        to_address=withdrawal.address or EXTERNAL,
        tx_id=tx_id,
        status=(
            TransactionStatus.COMPLETED
            if withdrawal.status == WITHDRAWAL_COMPLETED
            else TransactionStatus.PENDING
        ),
        network=withdrawal.network or "",
        api_source=ApiSource.BINANCE_WITHDRAWAL.value,
    )
