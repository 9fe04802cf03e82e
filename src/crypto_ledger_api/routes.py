from datetime import datetime, timezone
from typing import Any
from zipfile import BadZipFile

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import BaseModel

from crypto_ledger.config.state import ConfigState
from crypto_ledger.infrastructure.observability import get_api_logger
from crypto_ledger.ingestion.aggregator import TransactionAggregator
from crypto_ledger.ingestion.ports.http import IHttpClient
from crypto_ledger.storage.ports import ISheetStore
from crypto_ledger.storage.sheets.sync import SheetSync
from crypto_ledger_api.dependencies import get_config, get_http_client, get_sheet_store

logger = get_api_logger("routes")

router = APIRouter(prefix="/api")


class FetchRequest(BaseModel):
    start_date: datetime | None = None


@router.post("/fetch-exchange-data")
async def fetch_exchange_data(
    request: FetchRequest | None = None,
    config: ConfigState = Depends(get_config),
    http_client: IHttpClient = Depends(get_http_client),
):
    """Aggregate every configured account and return the merged result."""
    since = request.start_date if request else None
    result = await TransactionAggregator(config, http_client).aggregate(since=since)
    body = result.model_dump(mode="json")
    if not result.success:
        return JSONResponse(status_code=500, content=body)
    return body


@router.post("/crypto-to-sheets")
async def crypto_to_sheets(
    request: FetchRequest | None = None,
    config: ConfigState = Depends(get_config),
    http_client: IHttpClient = Depends(get_http_client),
    store: ISheetStore = Depends(get_sheet_store),
):
    """Aggregate, then append new rows to the spreadsheet and refresh account status."""
    since = request.start_date if request else None
    result = await TransactionAggregator(config, http_client).aggregate(since=since)
    if not result.success:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": result.error,
                "timestamp": result.timestamp.isoformat(),
            },
        )

    report = SheetSync(store, config.sheets).sync(result)
    return {
        "success": True,
        "count": result.count,
        "sheets": report.model_dump(mode="json"),
        "api_status": {
            label: {
                "status": account.status.value,
                "last_sync": account.last_sync.isoformat(),
                "notes": account.status_notes(),
                "transaction_count": account.total_count,
            }
            for label, account in result.results.items()
        },
        "timestamp": result.timestamp.isoformat(),
    }


@router.get("/sheets")
async def read_sheets(
    config: ConfigState = Depends(get_config),
    store: ISheetStore = Depends(get_sheet_store),
) -> dict[str, Any]:
    """Rows of FORMATTED_TRANSACTIONS shaped as transaction dicts."""
    try:
        transactions = SheetSync(store, config.sheets).read_transactions()
    except (OSError, BadZipFile, InvalidFileException) as e:
        logger.error("sheet_read_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to read spreadsheet", "details": str(e)},
        ) from e

    return {
        "transactions": transactions,
        "total_rows": len(transactions),
        "last_updated": datetime.now(timezone.utc).isoformat(),
    }
