"""Blockstream (Esplora) transaction normalizer.

A Bitcoin transaction has no single sender or recipient: the tracked
address spends when it owns an input and receives when it owns an output.
Values are in satoshi (1 BTC = 100,000,000 sat).
"""

from crypto_ledger.ingestion.schemas.bitcoin import (
    BlockstreamOutput,
    BlockstreamTransaction,
)
from crypto_ledger.shared.models.enums import (
    ApiSource,
    TransactionStatus,
    TransactionType,
)
from crypto_ledger.shared.models.transactions import Transaction
from crypto_ledger.transformation.normalizers import (
    NormalizationError,
    parse_epoch_seconds,
    scale_base_units,
    to_iso,
)

BTC_ASSET = "BTC"
BTC_DECIMALS = 8
NETWORK = "BTC"
EXTERNAL = "External"


def _sats(output: BlockstreamOutput) -> int:
    try:
        return int(output.value or 0)
    except ValueError as e:
        raise NormalizationError(f"Malformed output value: {output.value!r}") from e


def normalize_btc_transaction(
    transaction: BlockstreamTransaction, wallet_address: str, platform: str
) -> Transaction | None:
    """
    Withdrawal when the address funds any input: the amount is what left for
    other addresses (change excluded). Otherwise a deposit of what the
    address received. Unconfirmed transactions and self-transfers return None.
    """
    if not transaction.status.confirmed or not transaction.txid:
        return None

    spent = [
        i.prevout
        for i in transaction.vin
        if i.prevout is not None and i.prevout.scriptpubkey_address == wallet_address
    ]
    received = [
        o for o in transaction.vout if o.scriptpubkey_address == wallet_address
    ]

    if spent:
        others = [
            o for o in transaction.vout if o.scriptpubkey_address != wallet_address
        ]
        sats = sum(_sats(o) for o in others)
        tx_type = TransactionType.WITHDRAWAL
        from_address = wallet_address
        to_address = next(
            (o.scriptpubkey_address for o in others if o.scriptpubkey_address),
            EXTERNAL,
        )
    elif received:
        sats = sum(_sats(o) for o in received)
        tx_type = TransactionType.DEPOSIT
        from_address = next(
            (
                i.prevout.scriptpubkey_address
                for i in transaction.vin
                if i.prevout is not None and i.prevout.scriptpubkey_address
            ),
            EXTERNAL,
        )
        to_address = wallet_address
    else:
        return None

    if sats <= 0:
        return None

    return Transaction(
        platform=platform,
        type=tx_type,
        asset=BTC_ASSET,
        amount=scale_base_units(str(sats), BTC_DECIMALS),
        timestamp=to_iso(parse_epoch_seconds(transaction.status.block_time)),
        from_address=from_address,
        to_address=to_address,
        tx_id=transaction.txid,
        status=TransactionStatus.COMPLETED,
        network=NETWORK,
        api_source=ApiSource.BLOCKSTREAM.value,
    )
