"""SQL-backed record store (SQLAlchemy async Core).

One table per schema; row order is the autoincrement _row key, and
row_index is the 0-based position in that order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import Table, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.constants import TABLE_SCHEMAS
from app.domain.exceptions import TableNotFoundException
from app.infrastructure.persistence.models.record_tables import ROW_KEY, build_metadata
from app.infrastructure.persistence.repositories.base import BaseRecordStore

logger = logging.getLogger(__name__)


class SqlRecordStore(BaseRecordStore):
    """Record tables stored in a relational database.

    Call initialize() once (app startup) to create missing tables.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        schemas: Mapping[str, Sequence[str]] = TABLE_SCHEMAS,
    ) -> None:
        self.engine = engine
        self.schemas = {name: list(headers) for name, headers in schemas.items()}
        self.metadata = build_metadata(schemas)

    async def initialize(self) -> None:
        """Create every table that does not exist yet. Existing rows are kept."""
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.create_all)
        logger.info("Record store initialized: %s", ", ".join(self.schemas))

    def _table(self, table: str) -> Table:
        if table not in self.metadata.tables:
            raise TableNotFoundException(table)
        return self.metadata.tables[table]

    async def get_headers(self, table: str) -> list[str]:
        self._table(table)
        return list(self.schemas[table])

    async def read_column(self, table: str, column: str) -> list[Any]:
        await self.require_column(table, column)
        sa_table = self._table(table)
        async with self.engine.connect() as conn:
            result = await conn.execute(
                select(sa_table.c[column]).order_by(sa_table.c[ROW_KEY])
            )
            return list(result.scalars().all())

    async def read_rows(self, table: str) -> list[dict[str, Any]]:
        sa_table = self._table(table)
        headers = self.schemas[table]
        async with self.engine.connect() as conn:
            result = await conn.execute(
                select(*(sa_table.c[h] for h in headers)).order_by(sa_table.c[ROW_KEY])
            )
            return [dict(row._mapping) for row in result]

    async def append_row(self, table: str, values: list[Any]) -> int:
        sa_table = self._table(table)
        headers = self.schemas[table]
        padded = self._pad_values(table, headers, values)
        async with self.engine.begin() as conn:
            await conn.execute(insert(sa_table).values(dict(zip(headers, padded))))
            count = await conn.scalar(select(func.count()).select_from(sa_table))
        return int(count) - 1

    async def update_cell(
        self, table: str, row_index: int, column: str, value: Any
    ) -> None:
        await self.require_column(table, column)
        sa_table = self._table(table)
        async with self.engine.begin() as conn:
            row_key = await conn.scalar(
                select(sa_table.c[ROW_KEY])
                .order_by(sa_table.c[ROW_KEY])
                .offset(max(row_index, 0))
                .limit(1)
            )
            if row_key is None or row_index < 0:
                count = await conn.scalar(select(func.count()).select_from(sa_table))
                self._check_row_index(table, row_index, int(count))
            await conn.execute(
                update(sa_table)
                .where(sa_table.c[ROW_KEY] == row_key)
                .values({column: value})
            )
