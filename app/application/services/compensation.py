"""Compensating actions for writes that span several record tables.

Record stores have no multi-table transactions. A write that touches,
say, Sales, Inventory, Customers and Financials goes through a
CompensationLog: each applied step registers its undo, and if a later
step fails the undos run newest-first before the original error
propagates. Cell updates are restored to their previous value; appended
rows cannot be removed, so they are marked VOIDED in their Status column.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

from app.application.interfaces.repositories import IRecordStore
from app.core.constants import STATUS_VOIDED

logger = logging.getLogger(__name__)

Undo = Callable[[], Awaitable[None]]


class CompensationLog:
    """Async context manager recording undo steps for one multi-table write.

    Usage:
        async with CompensationLog(records, "sale") as log:
            await log.update_cell(...)
            log.register_appended(...)
    """

    def __init__(self, records: IRecordStore, operation: str) -> None:
        self.records = records
        self.operation = operation
        self._undo: list[tuple[str, Undo]] = []
        self.rolled_back = False

    async def __aenter__(self) -> CompensationLog:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is not None:
            logger.warning("%s failed (%s); compensating %s steps", self.operation, exc, len(self._undo))
            await self.rollback()
        return False

    def register(self, description: str, undo: Undo) -> None:
        """Record an undo for a step that has been applied."""
        self._undo.append((description, undo))

    async def update_cell(
        self, table: str, row_index: int, column: str, old_value: Any, new_value: Any
    ) -> None:
        """Set a cell and register restoring old_value."""
        await self.records.update_cell(table, row_index, column, new_value)

        async def undo() -> None:
            await self.records.update_cell(table, row_index, column, old_value)

        self.register(f"{table}[{row_index}].{column}", undo)

    def register_appended(self, table: str, row_index: int, status_column: str = "Status") -> None:
        """Register voiding a row that has already been appended."""

        async def undo() -> None:
            await self.records.update_cell(table, row_index, status_column, STATUS_VOIDED)

        self.register(f"{table}[{row_index}] append", undo)

    async def rollback(self) -> None:
        """Run undos newest-first. A failing undo is logged and the rest still run."""
        while self._undo:
            description, undo = self._undo.pop()
            try:
                await undo()
            except Exception:
                logger.exception(
                    "%s: compensation for %s failed; manual repair needed",
                    self.operation,
                    description,
                )
        self.rolled_back = True
