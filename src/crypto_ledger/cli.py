"""Command-line entry point: run one aggregation and print the result."""

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone

from crypto_ledger.config.state import ConfigState, load_config
from crypto_ledger.infrastructure.observability import setup_logging
from crypto_ledger.ingestion.aggregator import TransactionAggregator
from crypto_ledger.ingestion.config.value_objects import HttpClientConfig
from crypto_ledger.ingestion.connectors.aiohttp_client import AiohttpClient
from crypto_ledger.shared.models.transactions import AggregateResult


def parse_since(value: str) -> datetime:
    """argparse type for --since: ISO date or datetime, UTC when no offset is given."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO date: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch deposits and withdrawals from every configured account"
    )
    parser.add_argument("--config", help="Path to YAML config file", default=None)
    parser.add_argument(
        "--since",
        type=parse_since,
        default=None,
        help="Only include transactions at or after this ISO date",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the full result as JSON"
    )
    return parser


def summarize(result: AggregateResult) -> str:
    if not result.success:
        return f"Aggregation failed: {result.error}"

    lines = [f"{result.count} transactions from {len(result.results)} accounts"]
    for label, account in result.results.items():
        status = account.status.value
        notes = account.status_notes()
        lines.append(f"  {label}: {status}" + (f" - {notes}" if notes else ""))
    return "\n".join(lines)


async def run(config: ConfigState, since: datetime | None) -> AggregateResult:
    async with AiohttpClient(
        HttpClientConfig(timeout=config.http.timeout, user_agent=config.http.user_agent)
    ) as http_client:
        return await TransactionAggregator(config, http_client).aggregate(since=since)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(level=config.logging.level, json_logs=config.logging.json_logs)

    result = asyncio.run(run(config, args.since))

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(summarize(result))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
