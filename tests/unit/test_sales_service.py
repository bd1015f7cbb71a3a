"""Tests for SalesService: multi-table sales, refunds, compensation and cache purges."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.application.dtos import CustomerCreate, ItemCreate, RefundCreate, SaleCreate
from app.core.constants import (
    STATUS_COMPLETED,
    STATUS_REFUNDED,
    STATUS_VOIDED,
    TABLE_CUSTOMERS,
    TABLE_FINANCIALS,
    TABLE_INVENTORY,
    TABLE_REFUNDS,
    TABLE_SALES,
)
from app.core.container import ServiceContainer
from app.domain.enums import CacheKey
from app.domain.exceptions import (
    InsufficientStockException,
    ResourceNotFoundException,
    ValidationException,
)


@pytest.fixture
async def stocked(container: ServiceContainer) -> tuple[str, str]:
    """One item (10 in stock at 2.50) and one customer with no balance."""
    item_id = await container.inventory.add_item(
        ItemCreate(name="Tea", price=2.5, cost=1.0, stock=10, reorder_level=2)
    )
    customer_id = await container.customers.add_customer(CustomerCreate(name="Ann"))
    return item_id, customer_id


async def _row(container: ServiceContainer, table: str, index: int = 0) -> dict:
    return (await container.records.read_rows(table))[index]


async def test_cash_sale_writes_every_table(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    result = await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=3))

    assert result.sale_id == "SALE-001"
    assert result.transaction_id == "FIN-001"
    assert result.total == 7.5
    assert result.remaining_stock == 7
    assert result.customer_balance is None

    sale = await _row(container, TABLE_SALES)
    assert sale["Item_ID"] == item_id
    assert sale["Quantity"] == 3
    assert sale["Total"] == 7.5
    assert sale["Status"] == STATUS_COMPLETED
    assert (await _row(container, TABLE_INVENTORY))["Current_Stock"] == 7
    txn = await _row(container, TABLE_FINANCIALS)
    assert txn["Type"] == "sale"
    assert txn["Amount"] == 7.5
    assert txn["Reference"] == "SALE-001"


async def test_credit_sale_adds_to_customer_balance(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, customer_id = stocked
    result = await container.sales.create_sale(
        SaleCreate(item_id=item_id, quantity=2, customer_id=customer_id, payment_method="credit")
    )
    assert result.customer_balance == 5.0
    customer = await _row(container, TABLE_CUSTOMERS)
    assert customer["Current_Balance"] == 5.0
    assert customer["Total_Purchases"] == 5.0
    assert customer["Last_Purchase_Date"]


async def test_cash_sale_to_customer_keeps_balance(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, customer_id = stocked
    result = await container.sales.create_sale(
        SaleCreate(item_id=item_id, quantity=1, customer_id=customer_id, payment_method="card")
    )
    assert result.customer_balance == 0.0
    assert (await _row(container, TABLE_CUSTOMERS))["Total_Purchases"] == 2.5


async def test_explicit_unit_price_overrides_list_price(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    result = await container.sales.create_sale(
        SaleCreate(item_id=item_id, quantity=2, unit_price=2.0)
    )
    assert result.total == 4.0


@pytest.mark.parametrize(
    ("overrides", "error"),
    [
        ({"quantity": 0}, ValidationException),
        ({"payment_method": "barter"}, ValidationException),
        ({"payment_method": "credit"}, ValidationException),
        ({"quantity": 11}, InsufficientStockException),
        ({"customer_id": "CUST-404"}, ResourceNotFoundException),
    ],
)
async def test_rejected_sales_write_nothing(
    container: ServiceContainer, stocked: tuple[str, str], overrides: dict, error: type
) -> None:
    item_id, _ = stocked
    data = {"item_id": item_id, "quantity": 1, **overrides}
    with pytest.raises(error):
        await container.sales.create_sale(SaleCreate(**data))
    assert await container.records.read_rows(TABLE_SALES) == []
    assert await container.records.read_rows(TABLE_FINANCIALS) == []


async def test_unknown_item(container: ServiceContainer) -> None:
    with pytest.raises(ResourceNotFoundException):
        await container.sales.create_sale(SaleCreate(item_id="ITEM-404", quantity=1))


async def test_failed_ledger_write_compensates_and_purges(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    """A failure on the last step voids the sale and restores stock and balance."""
    item_id, customer_id = stocked
    await container.inventory.list_items()
    container.financials.append_transaction = AsyncMock(side_effect=RuntimeError("ledger down"))

    with pytest.raises(RuntimeError, match="ledger down"):
        await container.sales.create_sale(
            SaleCreate(item_id=item_id, quantity=4, customer_id=customer_id, payment_method="credit")
        )

    assert (await _row(container, TABLE_SALES))["Status"] == STATUS_VOIDED
    assert (await _row(container, TABLE_INVENTORY))["Current_Stock"] == 10
    customer = await _row(container, TABLE_CUSTOMERS)
    assert customer["Current_Balance"] == 0.0
    assert customer["Total_Purchases"] == 0.0
    assert await container.cache.get(CacheKey.INVENTORY_ALL) is None
    assert await container.sales.fetch_sales() == []


async def test_voided_sale_number_is_not_reused(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    original = container.financials.append_transaction
    container.financials.append_transaction = AsyncMock(side_effect=RuntimeError("ledger down"))
    with pytest.raises(RuntimeError):
        await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))
    container.financials.append_transaction = original

    result = await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))
    assert result.sale_id == "SALE-002"


async def test_sale_purges_dependent_views(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    await container.inventory.list_items()
    await container.sales.list_recent_sales()
    await container.dashboard.get_dashboard()

    await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))

    for key in (CacheKey.INVENTORY_ALL, CacheKey.RECENT_SALES, CacheKey.DASHBOARD):
        assert await container.cache.get(key) is None


async def test_recent_sales_newest_first(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    for _ in range(3):
        await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))
    recent = await container.sales.list_recent_sales()
    assert [s["Sale_ID"] for s in recent] == ["SALE-003", "SALE-002", "SALE-001"]


async def test_recent_sales_respects_limit(
    container: ServiceContainer, stocked: tuple[str, str]
) -> None:
    item_id, _ = stocked
    container.sales.recent_limit = 2
    for _ in range(3):
        await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))
    assert [s["Sale_ID"] for s in await container.sales.fetch_recent_sales()] == [
        "SALE-003",
        "SALE-002",
    ]


async def test_concurrent_sales_get_distinct_ids(
    container: ServiceContainer,
) -> None:
    item_id = await container.inventory.add_item(ItemCreate(name="Rice", price=1.0, stock=100))
    results = await asyncio.gather(
        *(container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1)) for _ in range(10))
    )
    sale_ids = {r.sale_id for r in results}
    transaction_ids = {r.transaction_id for r in results}
    assert len(sale_ids) == 10
    assert len(transaction_ids) == 10
    assert sale_ids == {f"SALE-{n:03d}" for n in range(1, 11)}


async def test_full_refund(container: ServiceContainer, stocked: tuple[str, str]) -> None:
    item_id, customer_id = stocked
    sale = await container.sales.create_sale(
        SaleCreate(item_id=item_id, quantity=4, customer_id=customer_id, payment_method="credit")
    )

    refund = await container.sales.refund_sale(RefundCreate(sale_id=sale.sale_id, reason="damaged"))

    assert refund.refund_id == "REF-001"
    assert refund.transaction_id == "FIN-002"
    assert refund.amount == 10.0
    assert (await _row(container, TABLE_SALES))["Status"] == STATUS_REFUNDED
    assert (await _row(container, TABLE_INVENTORY))["Current_Stock"] == 10
    assert (await _row(container, TABLE_CUSTOMERS))["Current_Balance"] == 0.0
    refund_row = await _row(container, TABLE_REFUNDS)
    assert refund_row["Sale_ID"] == sale.sale_id
    assert refund_row["Reason"] == "damaged"
    txn = await _row(container, TABLE_FINANCIALS, 1)
    assert txn["Type"] == "refund"
    assert txn["Reference"] == "REF-001"


async def test_partial_refund(container: ServiceContainer, stocked: tuple[str, str]) -> None:
    item_id, _ = stocked
    sale = await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=4))
    refund = await container.sales.refund_sale(RefundCreate(sale_id=sale.sale_id, quantity=1))
    assert refund.amount == 2.5
    assert (await _row(container, TABLE_INVENTORY))["Current_Stock"] == 7


async def test_refund_twice_rejected(container: ServiceContainer, stocked: tuple[str, str]) -> None:
    item_id, _ = stocked
    sale = await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=1))
    await container.sales.refund_sale(RefundCreate(sale_id=sale.sale_id))
    with pytest.raises(ValidationException):
        await container.sales.refund_sale(RefundCreate(sale_id=sale.sale_id))


@pytest.mark.parametrize("quantity", [0, 3])
async def test_refund_quantity_bounds(
    container: ServiceContainer, stocked: tuple[str, str], quantity: int
) -> None:
    item_id, _ = stocked
    sale = await container.sales.create_sale(SaleCreate(item_id=item_id, quantity=2))
    with pytest.raises(ValidationException):
        await container.sales.refund_sale(RefundCreate(sale_id=sale.sale_id, quantity=quantity))


async def test_refund_unknown_sale(container: ServiceContainer) -> None:
    with pytest.raises(ResourceNotFoundException):
        await container.sales.refund_sale(RefundCreate(sale_id="SALE-404"))
