"""In-process record store: tables as header lists plus row lists.

Used for development, tests, and single-process deployments.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from app.core.constants import TABLE_SCHEMAS
from app.domain.exceptions import TableNotFoundException
from app.infrastructure.persistence.repositories.base import BaseRecordStore


class InMemoryRecordStore(BaseRecordStore):
    """Header-described tables held in memory. Rows are stored as lists."""

    def __init__(self, schemas: Mapping[str, Sequence[str]] | None = None) -> None:
        self._headers: dict[str, list[str]] = {}
        self._rows: dict[str, list[list[Any]]] = {}
        for name, headers in (schemas if schemas is not None else TABLE_SCHEMAS).items():
            self.create_table(name, headers)

    def create_table(self, table: str, headers: Sequence[str]) -> None:
        """Create (or reset) table with the given header row."""
        self._headers[table] = list(headers)
        self._rows[table] = []

    def _table_rows(self, table: str) -> list[list[Any]]:
        if table not in self._rows:
            raise TableNotFoundException(table)
        return self._rows[table]

    async def get_headers(self, table: str) -> list[str]:
        self._table_rows(table)
        return list(self._headers[table])

    async def read_rows(self, table: str) -> list[dict[str, Any]]:
        headers = self._headers.get(table, [])
        return [dict(zip(headers, row)) for row in self._table_rows(table)]

    async def append_row(self, table: str, values: list[Any]) -> int:
        rows = self._table_rows(table)
        rows.append(self._pad_values(table, self._headers[table], values))
        return len(rows) - 1

    async def update_cell(
        self, table: str, row_index: int, column: str, value: Any
    ) -> None:
        headers = await self.require_column(table, column)
        rows = self._table_rows(table)
        self._check_row_index(table, row_index, len(rows))
        rows[row_index][headers.index(column)] = value

    async def delete_row(self, table: str, row_index: int) -> None:
        """Remove a row; later rows shift up (manual sheet edit)."""
        rows = self._table_rows(table)
        self._check_row_index(table, row_index, len(rows))
        del rows[row_index]
