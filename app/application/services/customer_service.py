"""Customers: accounts, credit balances, and payments against debt."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.records import CustomerCreate, TransactionCreate
from app.application.services.compensation import CompensationLog
from app.application.services.financial_service import FinancialService
from app.application.services.record_service import RecordService
from app.core.constants import STATUS_ACTIVE, TABLE_CUSTOMERS, TABLE_FINANCIALS
from app.domain.enums import MutationCategory, TransactionType
from app.domain.exceptions import ValidationException
from app.shared.utils import sanitize_text, to_number

logger = logging.getLogger(__name__)


class CustomerService(RecordService):
    """Writes to the Customers table purge customer-derived caches before returning."""

    def __init__(self, *args: Any, financials: FinancialService, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.financials = financials

    async def add_customer(self, data: CustomerCreate) -> str:
        """Create a customer and return its CUST-NNN identifier."""
        self.require_name(data.name)
        self.require_non_negative(data.opening_balance, "opening_balance")
        customer_id, _ = await self.create_row(
            TABLE_CUSTOMERS,
            lambda _id: {
                "Name": sanitize_text(data.name, 200),
                "Email": sanitize_text(data.email, 200),
                "Phone": sanitize_text(data.phone, 50),
                "City": sanitize_text(data.city, 100),
                "Total_Purchases": 0.0,
                "Current_Balance": round(data.opening_balance, 2),
                "Last_Purchase_Date": "",
                "Status": STATUS_ACTIVE,
            },
        )
        await self.views.invalidate_customer_caches()
        logger.info("Customer %s added", customer_id)
        return customer_id

    async def record_payment(
        self, customer_id: str, amount: float, account: str = "cash"
    ) -> float:
        """Apply a payment against a customer's balance; return the new balance.

        Touches Customers and Financials; a failure after the balance
        update restores it.
        """
        if amount <= 0:
            raise ValidationException("Payment amount must be positive", field="amount")
        row_index, row = await self.require_row(TABLE_CUSTOMERS, customer_id, "customer")
        balance = to_number(row.get("Current_Balance"))
        if amount > balance:
            raise ValidationException(
                f"Payment {amount:.2f} exceeds balance {balance:.2f}", field="amount"
            )
        new_balance = round(balance - amount, 2)
        try:
            async with CompensationLog(self.records, "record_payment") as log:
                await log.update_cell(
                    TABLE_CUSTOMERS, row_index, "Current_Balance", row.get("Current_Balance"), new_balance
                )
                _, txn_row = await self.financials.append_transaction(
                    TransactionCreate(
                        type=TransactionType.PAYMENT,
                        amount=amount,
                        account=account,
                        reference=customer_id,
                        description=f"Payment from {customer_id}",
                    )
                )
                log.register_appended(TABLE_FINANCIALS, txn_row)
        finally:
            await self.views.invalidate(MutationCategory.CUSTOMER, MutationCategory.FINANCIAL)
        return new_balance

    async def fetch_customers(self) -> list[dict[str, Any]]:
        return await self.active_rows(TABLE_CUSTOMERS)

    async def fetch_customers_with_debt(self) -> list[dict[str, Any]]:
        """Customers with a positive balance, largest debt first."""
        debtors = [
            c for c in await self.fetch_customers()
            if to_number(c.get("Current_Balance")) > 0
        ]
        return sorted(debtors, key=lambda c: to_number(c.get("Current_Balance")), reverse=True)

    async def list_customers(self) -> list[dict[str, Any]]:
        return await self.views.get_customers(self.fetch_customers)

    async def list_customers_with_debt(self) -> list[dict[str, Any]]:
        return await self.views.get_customer_debt(self.fetch_customers_with_debt)
