"""Sales and refunds: the multi-table writes of the POS.

A sale appends to Sales, decrements Inventory, updates the customer
(purchases, last purchase date, and the balance when sold on credit),
and books a SALE entry in Financials. A refund reverses the stock and
balance effects and books a REFUND entry. Both run under a
CompensationLog and purge the caches of every category they touch, also
when they fail part-way.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.records import RefundCreate, RefundResult, SaleCreate, SaleResult, TransactionCreate
from app.application.services.compensation import CompensationLog
from app.application.services.financial_service import FinancialService
from app.application.services.record_service import RecordService
from app.core.config import Settings, get_settings
from app.core.constants import (
    STATUS_COMPLETED,
    STATUS_REFUNDED,
    TABLE_CUSTOMERS,
    TABLE_FINANCIALS,
    TABLE_INVENTORY,
    TABLE_REFUNDS,
    TABLE_SALES,
)
from app.domain.enums import MutationCategory, TransactionType
from app.domain.exceptions import InsufficientStockException, ValidationException
from app.shared.utils import sanitize_text, to_number, utc_now_iso

logger = logging.getLogger(__name__)

PAYMENT_METHODS = frozenset({"cash", "card", "mobile", "credit"})

_SALE_CATEGORIES = (
    MutationCategory.SALES,
    MutationCategory.INVENTORY,
    MutationCategory.CUSTOMER,
    MutationCategory.FINANCIAL,
)


class SalesService(RecordService):
    def __init__(
        self,
        *args: Any,
        financials: FinancialService,
        settings: Settings | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.financials = financials
        self.recent_limit = (settings or get_settings()).recent_sales_limit

    async def create_sale(self, data: SaleCreate) -> SaleResult:
        """Record a single-line sale.

        Raises:
            ValidationException: Bad quantity, price or payment method.
            ResourceNotFoundException: Unknown item or customer.
            InsufficientStockException: Not enough stock on hand.
            IdAllocationBusyException: ID lock not acquired in time.
        """
        if data.quantity < 1:
            raise ValidationException("Quantity must be at least 1", field="quantity")
        method = data.payment_method.lower()
        if method not in PAYMENT_METHODS:
            raise ValidationException(
                f"Unsupported payment method: {data.payment_method}", field="payment_method"
            )
        if method == "credit" and not data.customer_id:
            raise ValidationException("Credit sales need a customer", field="customer_id")

        item_index, item = await self.require_row(TABLE_INVENTORY, data.item_id, "item")
        stock = int(to_number(item.get("Current_Stock")))
        if data.quantity > stock:
            raise InsufficientStockException(data.item_id, data.quantity, stock)
        unit_price = data.unit_price if data.unit_price is not None else to_number(item.get("Price"))
        self.require_non_negative(unit_price, "unit_price")
        total = round(unit_price * data.quantity, 2)

        customer: tuple[int, dict[str, Any]] | None = None
        if data.customer_id:
            customer = await self.require_row(TABLE_CUSTOMERS, data.customer_id, "customer")

        now = utc_now_iso()
        customer_balance: float | None = None
        try:
            async with CompensationLog(self.records, "create_sale") as log:
                sale_id, sale_row = await self.create_row(
                    TABLE_SALES,
                    lambda _id: {
                        "Date": now,
                        "Customer_ID": data.customer_id or "",
                        "Item_ID": data.item_id,
                        "Quantity": data.quantity,
                        "Unit_Price": unit_price,
                        "Total": total,
                        "Payment_Method": method,
                        "Status": STATUS_COMPLETED,
                        "Notes": sanitize_text(data.notes),
                    },
                )
                log.register_appended(TABLE_SALES, sale_row)

                remaining = stock - data.quantity
                await log.update_cell(
                    TABLE_INVENTORY, item_index, "Current_Stock", item.get("Current_Stock"), remaining
                )
                await log.update_cell(
                    TABLE_INVENTORY, item_index, "Last_Updated", item.get("Last_Updated"), now
                )

                if customer is not None:
                    customer_index, row = customer
                    await log.update_cell(
                        TABLE_CUSTOMERS,
                        customer_index,
                        "Total_Purchases",
                        row.get("Total_Purchases"),
                        round(to_number(row.get("Total_Purchases")) + total, 2),
                    )
                    await log.update_cell(
                        TABLE_CUSTOMERS,
                        customer_index,
                        "Last_Purchase_Date",
                        row.get("Last_Purchase_Date"),
                        now,
                    )
                    customer_balance = to_number(row.get("Current_Balance"))
                    if method == "credit":
                        customer_balance = round(customer_balance + total, 2)
                        await log.update_cell(
                            TABLE_CUSTOMERS,
                            customer_index,
                            "Current_Balance",
                            row.get("Current_Balance"),
                            customer_balance,
                        )

                transaction_id = ""
                if total > 0:
                    transaction_id, txn_row = await self.financials.append_transaction(
                        TransactionCreate(
                            type=TransactionType.SALE,
                            amount=total,
                            account=method,
                            reference=sale_id,
                            description=f"Sale of {data.quantity} x {data.item_id}",
                        )
                    )
                    log.register_appended(TABLE_FINANCIALS, txn_row)
        finally:
            await self.views.invalidate(*_SALE_CATEGORIES)

        logger.info("Sale %s: %s x %s = %.2f (%s)", sale_id, data.quantity, data.item_id, total, method)
        return SaleResult(
            sale_id=sale_id,
            transaction_id=transaction_id,
            total=total,
            remaining_stock=remaining,
            customer_balance=customer_balance,
        )

    async def refund_sale(self, data: RefundCreate) -> RefundResult:
        """Refund all or part of a completed sale. A sale can be refunded once.

        Raises:
            ResourceNotFoundException: Unknown sale.
            ValidationException: Sale already refunded or bad quantity.
        """
        sale_index, sale = await self.require_row(TABLE_SALES, data.sale_id, "sale")
        if sale.get("Status") != STATUS_COMPLETED:
            raise ValidationException(
                f"Sale {data.sale_id} is {sale.get('Status')}, not refundable", field="sale_id"
            )
        sold = int(to_number(sale.get("Quantity")))
        quantity = data.quantity if data.quantity is not None else sold
        if quantity < 1 or quantity > sold:
            raise ValidationException(
                f"Refund quantity must be between 1 and {sold}", field="quantity"
            )
        amount = round(to_number(sale.get("Unit_Price")) * quantity, 2)
        item_id = sale.get("Item_ID") or ""
        customer_id = sale.get("Customer_ID") or ""

        try:
            async with CompensationLog(self.records, "refund_sale") as log:
                refund_id, refund_row = await self.create_row(
                    TABLE_REFUNDS,
                    lambda _id: {
                        "Date": utc_now_iso(),
                        "Sale_ID": data.sale_id,
                        "Quantity": quantity,
                        "Amount": amount,
                        "Reason": sanitize_text(data.reason),
                        "Status": STATUS_COMPLETED,
                    },
                )
                log.register_appended(TABLE_REFUNDS, refund_row)
                await log.update_cell(
                    TABLE_SALES, sale_index, "Status", sale.get("Status"), STATUS_REFUNDED
                )

                item_index, item = await self.require_row(TABLE_INVENTORY, item_id, "item")
                await log.update_cell(
                    TABLE_INVENTORY,
                    item_index,
                    "Current_Stock",
                    item.get("Current_Stock"),
                    int(to_number(item.get("Current_Stock"))) + quantity,
                )

                if customer_id and sale.get("Payment_Method") == "credit":
                    customer_index, customer = await self.require_row(
                        TABLE_CUSTOMERS, customer_id, "customer"
                    )
                    balance = to_number(customer.get("Current_Balance"))
                    await log.update_cell(
                        TABLE_CUSTOMERS,
                        customer_index,
                        "Current_Balance",
                        customer.get("Current_Balance"),
                        round(max(balance - amount, 0.0), 2),
                    )

                transaction_id = ""
                if amount > 0:
                    transaction_id, txn_row = await self.financials.append_transaction(
                        TransactionCreate(
                            type=TransactionType.REFUND,
                            amount=amount,
                            account=sale.get("Payment_Method") or "cash",
                            reference=refund_id,
                            description=f"Refund of {data.sale_id}",
                        )
                    )
                    log.register_appended(TABLE_FINANCIALS, txn_row)
        finally:
            await self.views.invalidate(*_SALE_CATEGORIES)

        logger.info("Refund %s for sale %s: %.2f", refund_id, data.sale_id, amount)
        return RefundResult(refund_id=refund_id, transaction_id=transaction_id, amount=amount)

    async def fetch_sales(self) -> list[dict[str, Any]]:
        return await self.active_rows(TABLE_SALES)

    async def fetch_recent_sales(self) -> list[dict[str, Any]]:
        """Newest sales first, at most recent_sales_limit of them."""
        sales = await self.fetch_sales()
        return list(reversed(sales))[: self.recent_limit]

    async def list_recent_sales(self) -> list[dict[str, Any]]:
        return await self.views.get_recent_sales(self.fetch_recent_sales)
