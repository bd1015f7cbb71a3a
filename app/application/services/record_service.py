"""Base class for services that write and read record tables."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from app.application.interfaces.repositories import IRecordStore
from app.application.services.cached_views import CachedViews
from app.application.services.id_allocator import IdAllocator
from app.core.constants import STATUS_VOIDED, TABLE_ID_SPECS, TABLE_SCHEMAS
from app.domain.exceptions import ResourceNotFoundException, ValidationException


class RecordService:
    """Shared plumbing: row building, lookups, and ID-allocating appends."""

    def __init__(
        self,
        records: IRecordStore,
        allocator: IdAllocator,
        views: CachedViews,
    ) -> None:
        self.records = records
        self.allocator = allocator
        self.views = views

    @staticmethod
    def row_values(table: str, fields: Mapping[str, Any]) -> list[Any]:
        """Order fields by the table header; unknown field names are rejected."""
        headers = TABLE_SCHEMAS[table]
        unknown = set(fields) - set(headers)
        if unknown:
            raise ValidationException(
                f"Unknown columns for {table}: {sorted(unknown)}", field="fields"
            )
        return [fields.get(header) for header in headers]

    async def create_row(
        self, table: str, build: Callable[[str], Mapping[str, Any]]
    ) -> tuple[str, int]:
        """Allocate the table's next ID and append build(id) under the allocation lock.

        Returns:
            (identifier, row_index).
        """
        id_column, prefix = TABLE_ID_SPECS[table]

        def build_row(new_id: str) -> list[Any]:
            return self.row_values(table, {id_column: new_id, **build(new_id)})

        return await self.allocator.allocate_and_append(table, id_column, prefix, build_row)

    async def require_row(
        self, table: str, record_id: str, resource_type: str
    ) -> tuple[int, dict[str, Any]]:
        """Return (row_index, row) for record_id or raise ResourceNotFoundException."""
        id_column, _ = TABLE_ID_SPECS[table]
        found = await self.records.find_row(table, id_column, record_id)
        if found is None or found[1].get("Status") == STATUS_VOIDED:
            raise ResourceNotFoundException(resource_type, record_id)
        return found

    async def active_rows(self, table: str) -> list[dict[str, Any]]:
        """All rows except voided ones, in row order."""
        return [
            row for row in await self.records.read_rows(table)
            if row.get("Status") != STATUS_VOIDED
        ]

    @staticmethod
    def require_name(value: str, field: str = "name") -> None:
        if not value or not value.strip():
            raise ValidationException(f"{field} must be non-empty", field=field)

    @staticmethod
    def require_non_negative(value: float, field: str) -> None:
        if value < 0:
            raise ValidationException(f"{field} must not be negative", field=field)
