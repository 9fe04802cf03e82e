"""
Tests for TransactionAggregator: account ordering, missing credentials,
setup errors and the round trip from raw responses to canonical records.
"""

import pytest

from crypto_ledger.config.state import ConfigState
from crypto_ledger.ingestion.aggregator import TransactionAggregator
from crypto_ledger.shared.models import AccountStatus
from tests.fixtures import (
    BTC_WALLET,
    ETH_WALLET,
    TRON_WALLET,
    FakeHttpClient,
    json_response,
    load_fixture,
    query_params,
)

BINANCE_PATHS = ConfigState().binance
BYBIT_PATHS = ConfigState().bybit


def p2p_order(number: str, created: int) -> dict:
    return {
        "orderNumber": number,
        "tradeType": "BUY",
        "asset": "USDT",
        "amount": "20",
        "createTime": created,
        "orderStatus": "COMPLETED",
    }


def binance_by_key(orders_by_key: dict[str, list[dict]]):
    """P2P route answering BUY requests with the orders of the calling key."""

    def route(url, headers):
        orders = []
        if query_params(url)["tradeType"] == "BUY":
            orders = orders_by_key.get(headers["X-MBX-APIKEY"], [])
        return json_response({"code": "000000", "data": orders, "total": len(orders)})

    return route


def empty_binance_routes() -> dict:
    return {
        BINANCE_PATHS.pay_path: json_response({"code": "000000", "data": []}),
        BINANCE_PATHS.deposit_path: json_response([]),
        BINANCE_PATHS.withdrawal_path: json_response([]),
    }


class TestAccountOrdering:
    @pytest.mark.asyncio
    async def test_accounts_merge_in_configuration_order(self, clock):
        config = ConfigState(
            binance_accounts=[
                {"name": "A", "api_key": "key-a", "api_secret": "s"},
                {"name": "B", "api_key": "key-b", "api_secret": "s"},
            ]
        )
        routes = empty_binance_routes()
        # B's order is older than A's; merge order still follows the accounts
        routes[BINANCE_PATHS.p2p_path] = binance_by_key(
            {
                "key-a": [p2p_order("a1", 1700000500000)],
                "key-b": [p2p_order("b1", 1700000000000)],
            }
        )
        client = FakeHttpClient(routes)

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is True
        assert [tx.tx_id for tx in result.transactions] == ["P2P_a1", "P2P_b1"]
        assert list(result.results) == ["Binance (A)", "Binance (B)"]
        assert result.count == 2

    @pytest.mark.asyncio
    async def test_exchange_groups_then_wallets(self, clock):
        config = ConfigState(
            binance_accounts=[{"name": "GC", "api_key": "k", "api_secret": "s"}],
            bybit_accounts=[{"name": "CV", "api_key": "k2", "api_secret": "s2"}],
            wallets=[{"address": TRON_WALLET}],
        )
        routes = empty_binance_routes()
        routes[BINANCE_PATHS.p2p_path] = json_response(load_fixture("binance_p2p_empty"))
        routes[BYBIT_PATHS.deposit_path] = json_response(load_fixture("bybit_deposits"))
        routes[BYBIT_PATHS.withdrawal_path] = json_response(load_fixture("bybit_empty"))
        routes[f"/v1/accounts/{TRON_WALLET}/transactions/trc20"] = json_response(
            load_fixture("tron_trc20_in")
        )
        routes[f"/v1/accounts/{TRON_WALLET}/transactions"] = json_response(
            load_fixture("tron_empty")
        )
        client = FakeHttpClient(routes)

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert list(result.results) == ["Binance (GC)", "ByBit (CV)", "TRON Wallet"]
        platforms = [tx.platform for tx in result.transactions]
        assert platforms == sorted(
            platforms, key=["Binance (GC)", "ByBit (CV)", "TRON Wallet"].index
        )

    @pytest.mark.asyncio
    async def test_wallets_on_every_chain(self, clock):
        config = ConfigState(
            wallets=[
                {"chain": "bitcoin", "address": BTC_WALLET},
                {"chain": "ethereum", "address": ETH_WALLET},
                {"address": TRON_WALLET},
            ]
        )
        client = FakeHttpClient(
            {
                f"/api/address/{BTC_WALLET}/txs": json_response(
                    load_fixture("blockstream_txs")
                ),
                "/v2/api": json_response(load_fixture("etherscan_txlist")),
                f"/v1/accounts/{TRON_WALLET}/transactions/trc20": json_response(
                    load_fixture("tron_empty")
                ),
                f"/v1/accounts/{TRON_WALLET}/transactions": json_response(
                    load_fixture("tron_empty")
                ),
            }
        )

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is True
        assert list(result.results) == [
            "Bitcoin Wallet",
            "Ethereum Wallet",
            "TRON Wallet",
        ]
        assert [(tx.asset, tx.api_source) for tx in result.transactions] == [
            ("BTC", "Blockstream_BTC"),
            ("BTC", "Blockstream_BTC"),
            ("ETH", "Etherscan_ETH"),
            ("ETH", "Etherscan_ETH"),
        ]
        assert all(r.errors == {} for r in result.results.values())


class TestMissingCredentials:
    @pytest.mark.asyncio
    async def test_no_request_for_missing_credentials(self, clock, fixed_now):
        config = ConfigState(
            binance_accounts=[{"name": "Main", "api_key": "", "api_secret": ""}],
            bybit_accounts=[{"name": "CV", "api_key": "only-key"}],
        )
        client = FakeHttpClient()

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert client.calls == []
        assert result.success is True
        assert result.count == 0
        for label in ("Binance (Main)", "ByBit (CV)"):
            account = result.results[label]
            assert account.success is False
            assert account.status == AccountStatus.MISSING_CREDENTIALS
            assert account.last_sync == fixed_now


class TestSetupErrors:
    @pytest.mark.asyncio
    async def test_duplicate_labels(self, clock):
        config = ConfigState(
            binance_accounts=[
                {"name": "GC", "api_key": "k", "api_secret": "s"},
                {"name": "GC", "api_key": "k2", "api_secret": "s2"},
            ]
        )
        client = FakeHttpClient()

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is False
        assert "Duplicate account labels: Binance (GC)" in result.error
        assert result.results == {}
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_malformed_tron_address(self, clock):
        config = ConfigState(wallets=[{"address": "0x1234"}])
        client = FakeHttpClient()

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is False
        assert "Malformed TRON address" in result.error
        assert result.transactions == []
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_address_checked_against_its_chain(self, clock):
        config = ConfigState(
            wallets=[{"chain": "ethereum", "address": TRON_WALLET}]
        )
        client = FakeHttpClient()

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is False
        assert result.error.startswith("Malformed Ethereum address for Ethereum Wallet")
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_malformed_credentials(self, clock):
        config = ConfigState(
            binance_accounts=[
                {"name": "GC", "api_key": "key with spaces", "api_secret": "s"},
            ]
        )
        client = FakeHttpClient()

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert result.success is False
        assert result.error == "Malformed api_key for Binance (GC)"
        assert result.results == {}
        assert client.calls == []


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_p2p_buy_order_end_to_end(self, clock):
        config = ConfigState(
            binance_accounts=[{"name": "X", "api_key": "k", "api_secret": "s"}]
        )
        # no tradeType and a string createTime: the side comes from the request
        order = {
            "asset": "BTC",
            "amount": "0.5",
            "orderNumber": "123",
            "createTime": "1700000000000",
            "orderStatus": "COMPLETED",
        }
        routes = empty_binance_routes()
        routes[BINANCE_PATHS.p2p_path] = binance_by_key({"k": [order]})
        client = FakeHttpClient(routes)

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        (tx,) = result.transactions
        assert tx.platform == "Binance (X)"
        assert tx.type == "deposit"
        assert tx.asset == "BTC"
        assert tx.amount == "0.5"
        assert tx.tx_id == "P2P_123"
        assert tx.status == "Completed"
        assert tx.network == "P2P"
        assert tx.timestamp == "2023-11-14T22:13:20.000Z"

    @pytest.mark.asyncio
    async def test_raw_deposit_to_canonical_record(self, clock):
        config = ConfigState(
            binance_accounts=[{"name": "GC", "api_key": "k", "api_secret": "s"}]
        )
        routes = empty_binance_routes()
        routes[BINANCE_PATHS.p2p_path] = json_response(load_fixture("binance_p2p_empty"))
        routes[BINANCE_PATHS.deposit_path] = json_response(
            [
                {
                    "coin": "USDT",
                    "amount": "25",
                    "insertTime": 1700000000000,
                    "status": 1,
                    "txId": "0xabc",
                    "network": "TRX",
                }
            ]
        )
        client = FakeHttpClient(routes)

        result = await TransactionAggregator(config, client, clock=clock).aggregate()

        assert len(result.transactions) == 1
        tx = result.transactions[0]
        assert tx.model_dump() == {
            "platform": "Binance (GC)",
            "type": "deposit",
            "asset": "USDT",
            "amount": "25",
            "timestamp": "2023-11-14T22:13:20.000Z",
            "from_address": "External",
            "to_address": "Binance (GC)",
            "tx_id": "0xabc",
            "status": "Completed",
            "network": "TRX",
            "api_source": "Binance_Deposit",
        }
