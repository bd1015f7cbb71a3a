"""Domain enumerations for the shop ledger.

Enums represent fixed sets of domain values: the cache key namespace
and the mutation categories that drive cache invalidation.
"""

from enum import Enum


class CacheKey(str, Enum):
    """Cached views fronting full-table reads."""

    INVENTORY_ALL = "inventory-all"
    CUSTOMERS_ALL = "customers-all"
    SUPPLIERS_ALL = "suppliers-all"
    RECENT_SALES = "recent-sales"
    DASHBOARD = "dashboard-aggregate"
    LOW_STOCK = "low-stock"
    CUSTOMER_DEBT = "customer-debt"

    @classmethod
    def values(cls) -> list[str]:
        """Return all cache key values as strings.

        Returns:
            List of enum value strings (e.g. for stats or bulk invalidation).
        """
        return [key.value for key in cls]


class MutationCategory(str, Enum):
    """Kind of entity a write touched; selects the cache keys to purge."""

    INVENTORY = "inventory"
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    SALES = "sales"
    FINANCIAL = "financial"


class TransactionType(str, Enum):
    """Financials table entry type."""

    SALE = "sale"
    REFUND = "refund"
    PAYMENT = "payment"
    EXPENSE = "expense"
    PURCHASE = "purchase"
