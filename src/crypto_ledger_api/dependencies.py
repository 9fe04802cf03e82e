"""FastAPI dependencies; resources live on app.state and are set in the lifespan."""

from fastapi import Request

from crypto_ledger.config.state import ConfigState
from crypto_ledger.ingestion.ports.http import IHttpClient
from crypto_ledger.storage.ports import ISheetStore
from crypto_ledger.storage.sheets.xlsx_store import XlsxSheetStore


def get_config(request: Request) -> ConfigState:
    return request.app.state.config


def get_http_client(request: Request) -> IHttpClient:
    return request.app.state.http_client


def get_sheet_store(request: Request) -> ISheetStore:
    return XlsxSheetStore(request.app.state.config.sheets.path)
