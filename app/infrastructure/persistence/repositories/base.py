"""Base record store: header checks and derived lookups shared by backends."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.exceptions import ColumnNotFoundException, ValidationException


class BaseRecordStore(ABC):
    """Base record store with column checks, read_column and find_row.

    Subclasses implement get_headers, read_rows, append_row and
    update_cell. LSP: subclasses are substitutable for IRecordStore.
    """

    @abstractmethod
    async def get_headers(self, table: str) -> list[str]:
        """Return ordered column names; raise TableNotFoundException if missing."""

    @abstractmethod
    async def read_rows(self, table: str) -> list[dict[str, Any]]:
        """Return all rows as header-keyed dicts in row order."""

    @abstractmethod
    async def append_row(self, table: str, values: list[Any]) -> int:
        """Append values (ordered by header); return the new row_index."""

    @abstractmethod
    async def update_cell(
        self, table: str, row_index: int, column: str, value: Any
    ) -> None:
        """Set one cell by row_index and column name."""

    async def require_column(self, table: str, column: str) -> list[str]:
        """Return headers of table, raising ColumnNotFoundException if column is absent."""
        headers = await self.get_headers(table)
        if column not in headers:
            raise ColumnNotFoundException(table, column)
        return headers

    async def read_column(self, table: str, column: str) -> list[Any]:
        """Return every value of column in row order (header excluded)."""
        await self.require_column(table, column)
        return [row.get(column) for row in await self.read_rows(table)]

    async def find_row(
        self, table: str, column: str, value: Any
    ) -> tuple[int, dict[str, Any]] | None:
        """Return (row_index, row) of the first row whose column equals value, or None."""
        await self.require_column(table, column)
        for index, row in enumerate(await self.read_rows(table)):
            if row.get(column) == value:
                return index, row
        return None

    @staticmethod
    def _pad_values(table: str, headers: list[str], values: list[Any]) -> list[Any]:
        """Right-pad values with None to the header width; reject overlong rows."""
        if len(values) > len(headers):
            raise ValidationException(
                f"Row for {table} has {len(values)} values but the table has {len(headers)} columns",
                field="values",
            )
        return list(values) + [None] * (len(headers) - len(values))

    @staticmethod
    def _check_row_index(table: str, row_index: int, row_count: int) -> None:
        if row_index < 0 or row_index >= row_count:
            raise ValidationException(
                f"Row index {row_index} out of range for {table} ({row_count} rows)",
                field="row_index",
            )
