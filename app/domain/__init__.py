"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import CacheKey, MutationCategory, TransactionType
from app.domain.exceptions import (
    ColumnNotFoundException,
    IdAllocationBusyException,
    IdAllocationRetryExhaustedException,
    InsufficientStockException,
    ResourceNotFoundException,
    ShopLedgerException,
    TableNotFoundException,
    ValidationException,
)
from app.domain.value_objects import RecordId

__all__ = [
    # Enums
    "CacheKey",
    "MutationCategory",
    "TransactionType",
    # Exceptions
    "ColumnNotFoundException",
    "IdAllocationBusyException",
    "IdAllocationRetryExhaustedException",
    "InsufficientStockException",
    "ResourceNotFoundException",
    "ShopLedgerException",
    "TableNotFoundException",
    "ValidationException",
    # Value objects
    "RecordId",
]
