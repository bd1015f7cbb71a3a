"""Sequential ID allocation under one global lock.

Every allocation, whatever its prefix or table, runs inside the same
named lock. Inside it the ID column is scanned in full and the next
number is derived from the highest suffix observed. No counter is
stored, so manual edits, externally inserted rows and deletions never
make the sequence drift. If the highest row is deleted its number is
issued again.

A batch reserved by allocate_batch_ids is not written by the allocator,
so its upper bound is kept as a floor for that table, column and prefix
until a scan sees the rows. The floor lives in this allocator instance;
allocate_batch_and_append writes the rows under the lock instead.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from app.application.interfaces.repositories import IRecordStore
from app.application.interfaces.services import ILockProvider
from app.core.config import Settings, get_settings
from app.domain.exceptions import (
    IdAllocationBusyException,
    IdAllocationRetryExhaustedException,
    ShopLedgerException,
    ValidationException,
)
from app.domain.value_objects import RecordId, validate_prefix

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class IdAllocator:
    """Allocates PREFIX-NNN identifiers from the live contents of a table column.

    allocate_id and allocate_batch_ids never write the IDs they return;
    callers persist records with them. allocate_and_append and
    allocate_batch_and_append also append the rows before the lock is
    released.
    """

    def __init__(
        self,
        records: IRecordStore,
        lock_provider: ILockProvider,
        settings: Settings | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize allocator.

        Args:
            records: Record store holding the scanned tables.
            lock_provider: Source of the global allocation lock.
            settings: Optional settings (lock name, wait, padding, retries).
            sleep: Awaitable sleep used for retry backoff (injectable for tests).
        """
        settings = settings or get_settings()
        self.records = records
        self.lock_provider = lock_provider
        self.lock_name = settings.id_lock_name
        self.lock_timeout = settings.id_lock_timeout_seconds
        self.pad_width = settings.id_pad_width
        self.retry_attempts = settings.id_retry_max_attempts
        self.retry_backoff_ms = settings.id_retry_backoff_ms
        self._sleep = sleep
        # (table, id_column, prefix) -> highest number handed out by an unwritten batch
        self._reserved: dict[tuple[str, str, str], int] = {}

    async def _max_suffix(self, table: str, id_column: str, prefix: str) -> int:
        """Return the highest numeric suffix for prefix in the column (0 if none)."""
        highest = 0
        for value in await self.records.read_column(table, id_column):
            number = RecordId.parse_suffix(value, prefix)
            if number is not None and number > highest:
                highest = number
        return highest

    async def _allocate(
        self,
        table: str,
        id_column: str,
        prefix: str,
        count: int,
        on_reserved: Callable[[list[str]], Awaitable[None]] | None = None,
        reserve: bool = False,
    ) -> list[str]:
        """Scan and compute under the global lock; on_reserved runs before release.

        With reserve, the range stays a floor for later scans until its rows appear.
        """
        validate_prefix(prefix)
        lock = self.lock_provider.get_lock(self.lock_name)
        if not await lock.try_acquire(self.lock_timeout):
            logger.warning(
                "ID allocation lock %s busy after %ss (%s in %s.%s)",
                self.lock_name,
                self.lock_timeout,
                prefix,
                table,
                id_column,
            )
            raise IdAllocationBusyException(self.lock_name, self.lock_timeout)
        try:
            scope = (table, id_column, prefix)
            observed = await self._max_suffix(table, id_column, prefix)
            floor = self._reserved.get(scope, 0)
            if observed >= floor:
                self._reserved.pop(scope, None)
            start = max(observed, floor) + 1
            ids = [
                str(RecordId(prefix, number, self.pad_width))
                for number in range(start, start + count)
            ]
            if reserve:
                self._reserved[scope] = start + count - 1
            if on_reserved is not None:
                await on_reserved(ids)
        finally:
            await lock.release()
        logger.debug("Allocated %s from %s.%s", ids, table, id_column)
        return ids

    async def allocate_id(self, table: str, id_column: str, prefix: str) -> str:
        """Return the next identifier for prefix in table.id_column.

        Raises:
            IdAllocationBusyException: Lock not acquired within the wait bound.
            ColumnNotFoundException: id_column is not in the table header.
        """
        ids = await self._allocate(table, id_column, prefix, 1)
        return ids[0]

    async def allocate_batch_ids(
        self, table: str, id_column: str, prefix: str, count: int
    ) -> list[str]:
        """Reserve count consecutive identifiers under a single lock acquisition.

        No later allocation from this allocator returns a number inside
        the range, whether or not the caller has written the rows yet.

        Raises:
            ValidationException: count is less than 1.
            IdAllocationBusyException: Lock not acquired within the wait bound.
            ColumnNotFoundException: id_column is not in the table header.
        """
        if count < 1:
            raise ValidationException("Batch size must be at least 1", field="count")
        return await self._allocate(table, id_column, prefix, count, reserve=True)

    async def allocate_id_with_retry(
        self,
        table: str,
        id_column: str,
        prefix: str,
        max_retries: int | None = None,
    ) -> str:
        """allocate_id with linear backoff (attempt x backoff_ms) between attempts.

        Non-retryable domain errors (e.g. a missing column) propagate at
        once. Anything else is retried until attempts run out.

        Raises:
            IdAllocationRetryExhaustedException: Every attempt failed.
        """
        attempts = max_retries if max_retries is not None else self.retry_attempts
        if attempts < 1:
            raise ValidationException("max_retries must be at least 1", field="max_retries")
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                return await self.allocate_id(table, id_column, prefix)
            except ShopLedgerException as e:
                if not e.is_retryable:
                    raise
                last_error = e
            except ValueError:
                raise
            except Exception as e:
                logger.warning("ID allocation attempt %s failed: %s", attempt, e)
                last_error = e
            if attempt < attempts:
                await self._sleep(attempt * self.retry_backoff_ms / 1000)
        logger.error("ID allocation for %s gave up after %s attempts", prefix, attempts)
        raise IdAllocationRetryExhaustedException(
            prefix, attempts, str(last_error)
        ) from last_error

    async def allocate_and_append(
        self,
        table: str,
        id_column: str,
        prefix: str,
        build_row: Callable[[str], list[Any]],
    ) -> tuple[str, int]:
        """Allocate an identifier and append the row built from it, both under the lock.

        Holding the lock across the append means no concurrent caller can
        scan the column before the new ID is visible in it.

        Returns:
            (identifier, row_index) of the appended row.
        """
        row_index = -1

        async def append(ids: list[str]) -> None:
            nonlocal row_index
            row_index = await self.records.append_row(table, build_row(ids[0]))

        ids = await self._allocate(table, id_column, prefix, 1, on_reserved=append)
        return ids[0], row_index

    async def allocate_batch_and_append(
        self,
        table: str,
        id_column: str,
        prefix: str,
        build_rows: Sequence[Callable[[str], list[Any]]],
    ) -> list[tuple[str, int]]:
        """Allocate one identifier per builder and append every row under the lock.

        The whole range is in the column before release, so it is visible
        to any later scan, in this process or another.

        Returns:
            (identifier, row_index) per appended row, in builder order.
        """
        if not build_rows:
            raise ValidationException("Batch size must be at least 1", field="count")
        appended: list[tuple[str, int]] = []

        async def append(ids: list[str]) -> None:
            for record_id, build_row in zip(ids, build_rows):
                row_index = await self.records.append_row(table, build_row(record_id))
                appended.append((record_id, row_index))

        await self._allocate(table, id_column, prefix, len(build_rows), on_reserved=append)
        return appended
