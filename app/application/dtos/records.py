"""DTOs for record-table use cases (no dependency on storage backends)."""

from dataclasses import dataclass

from app.domain.enums import TransactionType


@dataclass(frozen=True)
class ItemCreate:
    """New inventory item."""

    name: str
    price: float
    cost: float = 0.0
    category: str = ""
    stock: int = 0
    reorder_level: int = 0
    supplier_id: str | None = None


@dataclass(frozen=True)
class CustomerCreate:
    """New customer. opening_balance is debt carried in from elsewhere."""

    name: str
    email: str = ""
    phone: str = ""
    city: str = ""
    opening_balance: float = 0.0


@dataclass(frozen=True)
class SupplierCreate:
    """New supplier."""

    name: str
    contact: str = ""
    phone: str = ""
    email: str = ""
    opening_balance: float = 0.0


@dataclass(frozen=True)
class TransactionCreate:
    """Financials table entry."""

    type: TransactionType
    amount: float
    account: str = "cash"
    reference: str = ""
    description: str = ""


@dataclass(frozen=True)
class SaleCreate:
    """Single-line sale. payment_method 'credit' adds the total to the customer's balance."""

    item_id: str
    quantity: int
    customer_id: str | None = None
    unit_price: float | None = None
    payment_method: str = "cash"
    notes: str = ""


@dataclass(frozen=True)
class SaleResult:
    """Outcome of create_sale."""

    sale_id: str
    transaction_id: str
    total: float
    remaining_stock: int
    customer_balance: float | None = None


@dataclass(frozen=True)
class RefundCreate:
    """Refund of a completed sale; quantity None refunds the whole sale."""

    sale_id: str
    quantity: int | None = None
    reason: str = ""


@dataclass(frozen=True)
class RefundResult:
    """Outcome of refund_sale."""

    refund_id: str
    transaction_id: str
    amount: float
