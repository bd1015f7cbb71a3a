"""Repository interfaces (ports) for the application layer.

Protocols define contracts that record-store implementations must fulfill (DIP).
Tables are header-described: the header row is never returned, and
row_index is 0-based over data rows in insertion order.
"""

from __future__ import annotations

from typing import Any, Protocol


# Record store interface
class IRecordStore(Protocol):
    """Protocol for header-described record tables (DIP)."""

    async def get_headers(self, table: str) -> list[str]:
        """Return the ordered column names of table.

        Raises TableNotFoundException when table does not exist.
        """

    async def read_column(self, table: str, column: str) -> list[Any]:
        """Return every value of column in row order (header excluded).

        Raises ColumnNotFoundException when column is not in the header.
        """

    async def read_rows(self, table: str) -> list[dict[str, Any]]:
        """Return all rows as header-keyed dicts in row order."""

    async def append_row(self, table: str, values: list[Any]) -> int:
        """Append a row of values ordered by header; return its row_index."""

    async def update_cell(
        self, table: str, row_index: int, column: str, value: Any
    ) -> None:
        """Set a single cell by row_index and column name."""

    async def find_row(
        self, table: str, column: str, value: Any
    ) -> tuple[int, dict[str, Any]] | None:
        """Return (row_index, row) of the first row whose column equals value."""
