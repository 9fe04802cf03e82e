"""Storage port for the spreadsheet projection.

The sync pipeline only needs sheet-level row operations; a workbook file,
a Google Sheets client or an in-memory fake can sit behind this protocol.
"""

from collections.abc import Sequence
from typing import Any, Protocol


class ISheetStore(Protocol):
    def read_rows(self, sheet: str) -> list[list[Any]]:
        """Data rows below the header row; [] when the sheet does not exist."""
        ...

    def append_rows(
        self, sheet: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> int:
        """Append rows, creating the sheet with `headers` if needed."""
        ...

    def replace_rows(
        self, sheet: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        """Rewrite the header and every data row of a sheet."""
        ...
