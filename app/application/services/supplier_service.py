"""Suppliers."""

from __future__ import annotations

from typing import Any

from app.application.dtos.records import SupplierCreate
from app.application.services.record_service import RecordService
from app.core.constants import STATUS_ACTIVE, TABLE_SUPPLIERS
from app.shared.utils import sanitize_text


class SupplierService(RecordService):
    async def add_supplier(self, data: SupplierCreate) -> str:
        """Create a supplier and return its SUPP-NNN identifier."""
        self.require_name(data.name)
        self.require_non_negative(data.opening_balance, "opening_balance")
        supplier_id, _ = await self.create_row(
            TABLE_SUPPLIERS,
            lambda _id: {
                "Name": sanitize_text(data.name, 200),
                "Contact": sanitize_text(data.contact, 200),
                "Phone": sanitize_text(data.phone, 50),
                "Email": sanitize_text(data.email, 200),
                "Current_Balance": round(data.opening_balance, 2),
                "Status": STATUS_ACTIVE,
            },
        )
        await self.views.invalidate_supplier_caches()
        return supplier_id

    async def fetch_suppliers(self) -> list[dict[str, Any]]:
        return await self.active_rows(TABLE_SUPPLIERS)

    async def list_suppliers(self) -> list[dict[str, Any]]:
        return await self.views.get_suppliers(self.fetch_suppliers)
