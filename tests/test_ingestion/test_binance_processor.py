"""Binance account processor against scripted SAPI responses."""

from datetime import timedelta
from urllib.parse import urlsplit

import pytest

from crypto_ledger.config.state import BinanceSettings
from crypto_ledger.ingestion.adapters.binance_plugin import (
    BinanceAccountProcessor,
    BinanceClient,
)
from crypto_ledger.ingestion.fetcher import Fetcher
from crypto_ledger.ingestion.processing import REGION_BLOCKED_MESSAGE
from crypto_ledger.ingestion.signing import hmac_sha256_hex
from crypto_ledger.shared.models import AccountCredential, AccountStatus
from tests.fixtures import FakeHttpClient, json_response, load_fixture, query_params

SETTINGS = BinanceSettings()
CREDENTIAL = AccountCredential(name="GC", api_key="gc-key", api_secret="gc-secret")


def p2p_route(url, headers):
    side = query_params(url)["tradeType"]
    return json_response(load_fixture(f"binance_p2p_{side.lower()}"))


def full_routes() -> dict:
    return {
        SETTINGS.p2p_path: p2p_route,
        SETTINGS.pay_path: json_response(load_fixture("binance_pay")),
        SETTINGS.deposit_path: json_response(load_fixture("binance_deposits")),
        SETTINGS.withdrawal_path: json_response(load_fixture("binance_withdrawals")),
    }


def make_processor(routes, clock) -> tuple[BinanceAccountProcessor, FakeHttpClient]:
    client = FakeHttpClient(routes)
    processor = BinanceAccountProcessor(
        CREDENTIAL, SETTINGS, Fetcher(client), clock=clock
    )
    return processor, client


class TestBinanceClient:
    def test_signed_url_verifies(self, clock, fixed_now):
        client = BinanceClient(CREDENTIAL, SETTINGS, Fetcher(FakeHttpClient()), clock)

        url = client.build_url(SETTINGS.deposit_path, {"limit": 100})

        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}" == SETTINGS.base_url
        query, signature = parts.query.split("&signature=")
        assert query == (
            f"limit=100&recvWindow=5000&timestamp={int(fixed_now.timestamp() * 1000)}"
        )
        assert signature == hmac_sha256_hex(query, "gc-secret")

    @pytest.mark.asyncio
    async def test_api_key_header(self, clock):
        fake = FakeHttpClient({SETTINGS.deposit_path: json_response([])})
        client = BinanceClient(CREDENTIAL, SETTINGS, Fetcher(fake), clock)

        await client.signed_get(SETTINGS.deposit_path, {"limit": 1})

        _, _, headers = fake.calls[0]
        assert headers == {"X-MBX-APIKEY": "gc-key"}


class TestBinanceAccountProcessor:
    @pytest.mark.asyncio
    async def test_all_sub_endpoints(self, clock):
        processor, client = make_processor(full_routes(), clock)

        result = await processor.process()

        assert result.platform == "Binance (GC)"
        assert result.success is True
        assert result.status == AccountStatus.ACTIVE
        assert result.counts == {
            "Binance_P2P": 2,
            "Binance_Pay": 2,
            "Binance_Deposit": 2,
            "Binance_Withdrawal": 2,
        }
        assert result.total_count == 8
        assert [tx.tx_id for tx in result.transactions[:3]] == [
            "P2P_20231114001",
            "P2P_20231114003",
            "PAY_M_P_71505104267788288",
        ]
        assert all(tx.platform == "Binance (GC)" for tx in result.transactions)

    @pytest.mark.asyncio
    async def test_request_order_and_params(self, clock):
        processor, client = make_processor(full_routes(), clock)

        await processor.process()

        assert client.paths() == [
            SETTINGS.p2p_path,
            SETTINGS.p2p_path,
            SETTINGS.pay_path,
            SETTINGS.deposit_path,
            SETTINGS.withdrawal_path,
        ]
        buy, sell = (query_params(client.calls[i][1]) for i in (0, 1))
        assert (buy["tradeType"], sell["tradeType"]) == ("BUY", "SELL")
        assert buy["page"] == "1"
        assert "startTimestamp" not in buy

    @pytest.mark.asyncio
    async def test_since_is_sent_as_start_time(self, clock, fixed_now):
        processor, client = make_processor(full_routes(), clock)
        since = fixed_now - timedelta(days=30)

        await processor.process(since)

        expected = str(int(since.timestamp() * 1000))
        assert query_params(client.calls[0][1])["startTimestamp"] == expected
        assert query_params(client.calls[2][1])["startTime"] == expected

    @pytest.mark.asyncio
    async def test_failing_sub_endpoint_keeps_others(self, clock):
        routes = full_routes()
        routes[SETTINGS.pay_path] = json_response(
            load_fixture("binance_invalid_key"), 401, "Unauthorized"
        )
        processor, _ = make_processor(routes, clock)

        result = await processor.process()

        assert result.success is True
        assert "Binance_Pay" in result.errors
        assert "Invalid API-key" in result.errors["Binance_Pay"]
        assert result.counts["Binance_Pay"] == 0
        assert result.counts["Binance_Deposit"] == 2

    @pytest.mark.asyncio
    async def test_error_code_in_success_body(self, clock):
        routes = full_routes()
        routes[SETTINGS.deposit_path] = json_response(load_fixture("binance_invalid_key"))
        processor, _ = make_processor(routes, clock)

        result = await processor.process()

        assert "API error -2015" in result.errors["Binance_Deposit"]

    @pytest.mark.asyncio
    async def test_region_blocked_everywhere(self, clock):
        blocked = json_response({"code": 0, "msg": "restricted"}, 451, "Unavailable")
        routes = {path: blocked for path in full_routes()}
        processor, _ = make_processor(routes, clock)

        result = await processor.process()

        assert result.success is False
        assert result.region_blocked is True
        assert result.status == AccountStatus.ERROR
        assert set(result.errors.values()) == {REGION_BLOCKED_MESSAGE}

    @pytest.mark.asyncio
    async def test_empty_account_gets_note(self, clock):
        routes = {
            SETTINGS.p2p_path: json_response(load_fixture("binance_p2p_empty")),
            SETTINGS.pay_path: json_response({"code": "000000", "data": None}),
            SETTINGS.deposit_path: json_response([]),
            SETTINGS.withdrawal_path: json_response([]),
        }
        processor, _ = make_processor(routes, clock)

        result = await processor.process()

        assert result.success is True
        assert result.total_count == 0
        assert result.note == "No transactions returned"
