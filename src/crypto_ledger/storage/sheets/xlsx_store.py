"""Workbook-backed sheet store (openpyxl).

Each call opens the workbook, applies one change and saves it, so the file on
disk is always a complete workbook between calls.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Font
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from crypto_ledger.infrastructure.observability import get_storage_logger
from crypto_ledger.storage.ports import ISheetStore

HEADER_FONT = Font(bold=True)


class XlsxSheetStore(ISheetStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.logger = get_storage_logger("xlsx-store", path=str(self.path))

    def _load(self) -> Workbook:
        if self.path.exists():
            return openpyxl.load_workbook(self.path)
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        return wb

    def _save(self, wb: Workbook) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.path)

    @staticmethod
    def _sheet(wb: Workbook, sheet: str, headers: Sequence[str]) -> Worksheet:
        if sheet in wb.sheetnames:
            return wb[sheet]
        ws = wb.create_sheet(title=sheet)
        ws.append(list(headers))
        for cell in ws[1]:
            cell.font = HEADER_FONT
        return ws

    def read_rows(self, sheet: str) -> list[list[Any]]:
        if not self.path.exists():
            return []
        wb = openpyxl.load_workbook(self.path, read_only=True)
        try:
            if sheet not in wb.sheetnames:
                return []
            return [
                list(row)
                for row in wb[sheet].iter_rows(min_row=2, values_only=True)
                if any(value not in (None, "") for value in row)
            ]
        finally:
            wb.close()

    def append_rows(
        self, sheet: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> int:
        wb = self._load()
        ws = self._sheet(wb, sheet, headers)
        for row in rows:
            ws.append(list(row))
        self._save(wb)
        self.logger.info("rows_appended", sheet=sheet, count=len(rows))
        return len(rows)

    def replace_rows(
        self, sheet: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        wb = self._load()
        if sheet in wb.sheetnames:
            wb.remove(wb[sheet])
        ws = self._sheet(wb, sheet, headers)
        for row in rows:
            ws.append(list(row))
        self._save(wb)
        self.logger.info("rows_replaced", sheet=sheet, count=len(rows))
