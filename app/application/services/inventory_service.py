"""Inventory: items, stock adjustments, and the low-stock view."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.records import ItemCreate
from app.application.services.record_service import RecordService
from app.core.constants import STATUS_ACTIVE, TABLE_INVENTORY
from app.domain.exceptions import InsufficientStockException
from app.shared.utils import sanitize_text, to_number, utc_now_iso

logger = logging.getLogger(__name__)


class InventoryService(RecordService):
    """Writes to the Inventory table purge inventory-derived caches before returning."""

    async def add_item(self, data: ItemCreate) -> str:
        """Create an item and return its ITEM-NNN identifier."""
        self.require_name(data.name)
        self.require_non_negative(data.price, "price")
        self.require_non_negative(data.cost, "cost")
        self.require_non_negative(data.stock, "stock")
        self.require_non_negative(data.reorder_level, "reorder_level")
        item_id, _ = await self.create_row(
            TABLE_INVENTORY,
            lambda _id: {
                "Item_Name": sanitize_text(data.name, 200),
                "Category": sanitize_text(data.category, 100),
                "Price": data.price,
                "Cost": data.cost,
                "Current_Stock": data.stock,
                "Reorder_Level": data.reorder_level,
                "Supplier_ID": data.supplier_id or "",
                "Status": STATUS_ACTIVE,
                "Last_Updated": utc_now_iso(),
            },
        )
        await self.views.invalidate_inventory_caches()
        logger.info("Item %s added", item_id)
        return item_id

    async def adjust_stock(self, item_id: str, delta: int) -> int:
        """Add delta (may be negative) to an item's stock; return the new level.

        Raises:
            ResourceNotFoundException: Unknown item.
            InsufficientStockException: Stock would go below zero.
        """
        row_index, row = await self.require_row(TABLE_INVENTORY, item_id, "item")
        current = int(to_number(row.get("Current_Stock")))
        new_level = current + delta
        if new_level < 0:
            raise InsufficientStockException(item_id, -delta, current)
        await self.records.update_cell(TABLE_INVENTORY, row_index, "Current_Stock", new_level)
        await self.records.update_cell(TABLE_INVENTORY, row_index, "Last_Updated", utc_now_iso())
        await self.views.invalidate_inventory_caches()
        return new_level

    async def fetch_items(self) -> list[dict[str, Any]]:
        return await self.active_rows(TABLE_INVENTORY)

    async def fetch_low_stock(self) -> list[dict[str, Any]]:
        """Items at or below their reorder level."""
        return [
            item for item in await self.fetch_items()
            if to_number(item.get("Current_Stock")) <= to_number(item.get("Reorder_Level"))
        ]

    async def list_items(self) -> list[dict[str, Any]]:
        return await self.views.get_inventory(self.fetch_items)

    async def list_low_stock(self) -> list[dict[str, Any]]:
        return await self.views.get_low_stock(self.fetch_low_stock)
