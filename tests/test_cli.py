"""Tests for the crypto-ledger command-line entry point."""

import argparse
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from crypto_ledger import cli
from crypto_ledger.shared.models import AccountResult, AggregateResult
from crypto_ledger.shared.models.enums import AccountStatus

NOW = datetime(2023, 11, 15, tzinfo=timezone.utc)


def sample_result() -> AggregateResult:
    return AggregateResult(
        success=True,
        count=0,
        timestamp=NOW,
        results={
            "Binance (GC)": AccountResult(
                platform="Binance (GC)",
                success=True,
                status=AccountStatus.ACTIVE,
                counts={"Binance_P2P": 0},
                note="No transactions returned",
                last_sync=NOW,
            ),
            "ByBit (CV)": AccountResult.missing_credentials("ByBit (CV)"),
        },
    )


class TestParseSince:
    def test_date_only_is_utc_midnight(self):
        assert cli.parse_since("2023-11-01") == datetime(
            2023, 11, 1, tzinfo=timezone.utc
        )

    def test_z_suffix(self):
        assert cli.parse_since("2023-11-01T12:00:00Z") == datetime(
            2023, 11, 1, 12, tzinfo=timezone.utc
        )

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_since("last tuesday")


class TestSummarize:
    def test_lists_every_account(self):
        text = cli.summarize(sample_result())

        lines = text.splitlines()
        assert lines[0] == "0 transactions from 2 accounts"
        assert lines[1].startswith("  Binance (GC): Active")
        assert "No transactions returned" in lines[1]
        assert lines[2] == "  ByBit (CV): Missing Credentials - Missing credentials"

    def test_failure(self):
        result = AggregateResult(success=False, error="Duplicate account labels: X")
        assert cli.summarize(result) == (
            "Aggregation failed: Duplicate account labels: X"
        )


class TestMain:
    def test_json_output_and_exit_code(self, capsys):
        with patch.object(cli, "run", AsyncMock(return_value=sample_result())) as run, \
                patch.object(cli, "setup_logging"):
            code = cli.main(["--json", "--since", "2023-11-01"])

        assert code == 0
        _, since = run.call_args.args
        assert since == datetime(2023, 11, 1, tzinfo=timezone.utc)
        body = json.loads(capsys.readouterr().out)
        assert body["success"] is True
        assert set(body["results"]) == {"Binance (GC)", "ByBit (CV)"}

    def test_failed_aggregation_exits_non_zero(self, capsys):
        failed = AggregateResult(success=False, error="Malformed TRON address")
        with patch.object(cli, "run", AsyncMock(return_value=failed)), \
                patch.object(cli, "setup_logging"):
            code = cli.main([])

        assert code == 1
        assert "Aggregation failed" in capsys.readouterr().out
