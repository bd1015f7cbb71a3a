"""Dashboard aggregate over every record table."""

from __future__ import annotations

from typing import Any

from app.application.services.record_service import RecordService
from app.core.constants import (
    STATUS_REFUNDED,
    TABLE_CUSTOMERS,
    TABLE_FINANCIALS,
    TABLE_INVENTORY,
    TABLE_REFUNDS,
    TABLE_SALES,
)
from app.domain.enums import TransactionType
from app.shared.utils import to_number, utc_now_iso

_CASH_IN = {TransactionType.SALE.value, TransactionType.PAYMENT.value}
_CASH_OUT = {
    TransactionType.REFUND.value,
    TransactionType.EXPENSE.value,
    TransactionType.PURCHASE.value,
}


class DashboardService(RecordService):
    async def build_dashboard(self) -> dict[str, Any]:
        """Compute the aggregate from the tables (uncached)."""
        sales = await self.active_rows(TABLE_SALES)
        refunds = await self.active_rows(TABLE_REFUNDS)
        items = await self.active_rows(TABLE_INVENTORY)
        customers = await self.active_rows(TABLE_CUSTOMERS)
        ledger = await self.active_rows(TABLE_FINANCIALS)

        revenue = sum(to_number(s.get("Total")) for s in sales)
        refunds_total = sum(to_number(r.get("Amount")) for r in refunds)
        # Credit sales and their refunds move receivables, not cash.
        cash = [t for t in ledger if t.get("Account") != "credit"]
        cash_in = sum(to_number(t.get("Amount")) for t in cash if t.get("Type") in _CASH_IN)
        cash_out = sum(to_number(t.get("Amount")) for t in cash if t.get("Type") in _CASH_OUT)

        return {
            "generated_at": utc_now_iso(),
            "sales_count": len(sales),
            "refunded_sales": sum(1 for s in sales if s.get("Status") == STATUS_REFUNDED),
            "revenue": round(revenue, 2),
            "refunds_total": round(refunds_total, 2),
            "net_revenue": round(revenue - refunds_total, 2),
            "inventory_items": len(items),
            "inventory_value": round(
                sum(to_number(i.get("Cost")) * to_number(i.get("Current_Stock")) for i in items), 2
            ),
            "low_stock_count": sum(
                1 for i in items
                if to_number(i.get("Current_Stock")) <= to_number(i.get("Reorder_Level"))
            ),
            "customers": len(customers),
            "receivables": round(
                sum(max(to_number(c.get("Current_Balance")), 0.0) for c in customers), 2
            ),
            "cash_in": round(cash_in, 2),
            "cash_out": round(cash_out, 2),
            "net_cash": round(cash_in - cash_out, 2),
        }

    async def get_dashboard(self) -> dict[str, Any]:
        return await self.views.get_dashboard(self.build_dashboard)
