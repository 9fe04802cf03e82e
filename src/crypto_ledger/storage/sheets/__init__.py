from crypto_ledger.storage.sheets.sync import SheetSync, SyncReport
from crypto_ledger.storage.sheets.xlsx_store import XlsxSheetStore

__all__ = ["SheetSync", "SyncReport", "XlsxSheetStore"]
