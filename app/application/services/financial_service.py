"""Financials: the ledger of money movements (sales, refunds, payments, expenses)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.records import TransactionCreate
from app.application.services.record_service import RecordService
from app.core.constants import STATUS_COMPLETED, TABLE_FINANCIALS
from app.domain.exceptions import ValidationException
from app.shared.utils import sanitize_text, utc_now_iso


class FinancialService(RecordService):
    """Appends ledger entries. Amounts are stored positive; Type gives the direction."""

    async def append_transaction(self, data: TransactionCreate) -> tuple[str, int]:
        """Append an entry without cache invalidation (for multi-table writes).

        Returns:
            (transaction_id, row_index).
        """
        if data.amount <= 0:
            raise ValidationException("Transaction amount must be positive", field="amount")
        return await self.create_row(
            TABLE_FINANCIALS,
            lambda _id: {
                "Date": utc_now_iso(),
                "Type": data.type.value,
                "Account": data.account,
                "Amount": round(data.amount, 2),
                "Reference": data.reference,
                "Description": sanitize_text(data.description),
                "Status": STATUS_COMPLETED,
            },
        )

    async def record_transaction(self, data: TransactionCreate) -> str:
        """Append a standalone entry (e.g. an expense) and purge financial caches."""
        transaction_id, _ = await self.append_transaction(data)
        await self.views.invalidate_financial_caches()
        return transaction_id

    async def list_transactions(self) -> list[dict[str, Any]]:
        """Ledger rows (uncached; no view is keyed on the full ledger)."""
        return await self.active_rows(TABLE_FINANCIALS)
