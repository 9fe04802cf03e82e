"""
Tests for BaseAccountProcessor: per-sub-endpoint failure isolation, the
region-block message, dedup, time filtering and the two success policies.
"""

from datetime import datetime, timedelta, timezone

import pytest

from crypto_ledger.ingestion.exceptions import (
    AuthenticationError,
    RegionBlockedError,
    ServerError,
)
from crypto_ledger.ingestion.processing import (
    NO_TRANSACTIONS_NOTE,
    REGION_BLOCKED_MESSAGE,
    BaseAccountProcessor,
    SubEndpoint,
)
from crypto_ledger.ingestion.schemas import BinanceP2PResponse
from crypto_ledger.shared.models import AccountStatus, SuccessPolicy, Transaction

NOW = datetime(2023, 11, 15, tzinfo=timezone.utc)


def make_tx(tx_id: str, api_source: str, when: datetime | None = None) -> Transaction:
    return Transaction(
        platform="Test (A)",
        type="deposit",
        asset="USDT",
        amount="10",
        timestamp=(when or NOW - timedelta(hours=1)).strftime("%Y-%m-%dT%H:%M:%S.000Z"),
        from_address="External",
        to_address="Test (A)",
        tx_id=tx_id,
        status="Completed",
        network="TRX",
        api_source=api_source,
    )


def returning(*transactions):
    async def fetch(since):
        return list(transactions)

    return fetch


def raising(error: Exception):
    async def fetch(since):
        raise error

    return fetch


class StubProcessor(BaseAccountProcessor):
    exchange = "test"

    def __init__(self, endpoints, policy=SuccessPolicy.EXCHANGE):
        super().__init__("Test (A)", clock=lambda: NOW)
        self.endpoints = endpoints
        self.success_policy = policy

    def sub_endpoints(self):
        return self.endpoints


class TestFailureIsolation:
    @pytest.mark.asyncio
    async def test_later_sub_endpoints_run_after_failure(self):
        processor = StubProcessor(
            [
                SubEndpoint("P2P", raising(ServerError("boom", status_code=500))),
                SubEndpoint("Pay", returning(make_tx("1", "Pay"))),
                SubEndpoint("Deposit", returning(make_tx("2", "Deposit"))),
            ]
        )

        result = await processor.process()

        assert [tx.tx_id for tx in result.transactions] == ["1", "2"]
        assert result.success is True
        assert result.status == AccountStatus.ACTIVE
        assert result.errors == {"P2P": "boom"}
        assert result.error == "P2P: boom"
        assert result.counts == {"P2P": 0, "Pay": 1, "Deposit": 1}
        assert result.total_count == 2

    @pytest.mark.asyncio
    async def test_region_block_has_distinct_message(self):
        processor = StubProcessor(
            [
                SubEndpoint(
                    "P2P",
                    raising(RegionBlockedError("blocked", status_code=451)),
                ),
                SubEndpoint("Pay", raising(AuthenticationError("bad key", status_code=401))),
            ]
        )

        result = await processor.process()

        assert result.errors["P2P"] == REGION_BLOCKED_MESSAGE
        assert result.errors["Pay"] == "bad key"
        assert result.region_blocked is True
        assert result.success is False
        assert result.status == AccountStatus.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_recorded(self):
        async def bad_shape(since):
            BinanceP2PResponse.model_validate({"data": "not-a-list"})
            return []

        processor = StubProcessor(
            [SubEndpoint("P2P", bad_shape), SubEndpoint("Pay", returning())]
        )

        result = await processor.process()

        assert result.errors["P2P"].startswith("Unexpected response shape")

    @pytest.mark.asyncio
    async def test_programming_error_is_contained(self):
        processor = StubProcessor(
            [
                SubEndpoint("P2P", raising(KeyError("orderNumber"))),
                SubEndpoint("Pay", returning(make_tx("1", "Pay"))),
            ]
        )

        result = await processor.process()

        assert "Unexpected error" in result.errors["P2P"]
        assert result.total_count == 1


class TestSuccessPolicy:
    @pytest.mark.asyncio
    async def test_exchange_with_no_data_and_no_errors_succeeds_with_note(self):
        result = await StubProcessor([SubEndpoint("Deposit", returning())]).process()

        assert result.success is True
        assert result.status == AccountStatus.ACTIVE
        assert result.note == NO_TRANSACTIONS_NOTE
        assert result.error is None

    @pytest.mark.asyncio
    async def test_exchange_all_failed(self):
        result = await StubProcessor(
            [SubEndpoint("Deposit", raising(ServerError("down", status_code=502)))]
        ).process()

        assert result.success is False
        assert result.note is None

    @pytest.mark.asyncio
    async def test_wallet_always_succeeds_but_status_reflects_errors(self):
        result = await StubProcessor(
            [
                SubEndpoint("In", raising(ServerError("down", status_code=502))),
                SubEndpoint("Out", raising(ServerError("down", status_code=502))),
            ],
            policy=SuccessPolicy.WALLET,
        ).process()

        assert result.success is True
        assert result.status == AccountStatus.ERROR
        assert set(result.errors) == {"In", "Out"}


class TestDedupAndWindow:
    @pytest.mark.asyncio
    async def test_duplicates_within_account_are_dropped(self):
        processor = StubProcessor(
            [
                SubEndpoint(
                    "Deposit",
                    returning(make_tx("1", "Deposit"), make_tx("1", "Deposit")),
                ),
                SubEndpoint("Withdrawal", returning(make_tx("1", "Withdrawal"))),
            ]
        )

        result = await processor.process()

        assert [tx.dedup_key for tx in result.transactions] == [
            ("1", "Deposit"),
            ("1", "Withdrawal"),
        ]

    @pytest.mark.asyncio
    async def test_records_before_since_are_excluded(self):
        since = NOW - timedelta(days=1)
        processor = StubProcessor(
            [
                SubEndpoint(
                    "Deposit",
                    returning(
                        make_tx("old", "Deposit", NOW - timedelta(days=2)),
                        make_tx("new", "Deposit", NOW - timedelta(hours=2)),
                    ),
                )
            ]
        )

        result = await processor.process(since)

        assert [tx.tx_id for tx in result.transactions] == ["new"]
        assert all(tx.occurred_at >= since for tx in result.transactions)

    @pytest.mark.asyncio
    async def test_naive_since_is_treated_as_utc(self):
        seen = []

        async def capture(since):
            seen.append(since)
            return []

        await StubProcessor([SubEndpoint("Deposit", capture)]).process(
            datetime(2023, 11, 1)
        )

        assert seen == [datetime(2023, 11, 1, tzinfo=timezone.utc)]

    @pytest.mark.asyncio
    async def test_each_process_call_starts_fresh(self):
        processor = StubProcessor(
            [SubEndpoint("Deposit", returning(make_tx("1", "Deposit")))]
        )

        first = await processor.process()
        second = await processor.process()

        assert first.total_count == second.total_count == 1
        assert first is not second
        assert second.last_sync == NOW
