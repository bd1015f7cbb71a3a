"""Domain exceptions for the shop ledger.

Defines domain-level exceptions that represent business rule violations
and allocation failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class ShopLedgerException(Exception):
    """Base exception for all shop ledger errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. table, column).
        is_retryable: True when the failure is transient and the caller may retry.
    """

    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ShopLedgerException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class IdAllocationBusyException(ShopLedgerException):
    """Raised when the ID allocation lock is not acquired within the wait bound.

    Transient: the caller should retry shortly.
    """

    is_retryable = True

    def __init__(self, lock_name: str, timeout_seconds: float) -> None:
        """Initialize with the contended lock and the wait that elapsed.

        Args:
            lock_name: Name of the global allocation lock.
            timeout_seconds: How long the caller waited before giving up.
        """
        super().__init__(
            "System busy: could not reserve a new ID, please retry shortly.",
            "SYSTEM_BUSY",
            {"lock_name": lock_name, "timeout_seconds": timeout_seconds},
        )


class TableNotFoundException(ShopLedgerException):
    """Raised when a record table does not exist (setup problem, not retryable)."""

    def __init__(self, table: str) -> None:
        super().__init__(
            f"Configuration error: table '{table}' does not exist. "
            "Initialize the record store before use.",
            "SCHEMA_ERROR",
            {"table": table},
        )


class ColumnNotFoundException(ShopLedgerException):
    """Raised when an expected column is missing from a table header (not retryable)."""

    def __init__(self, table: str, column: str) -> None:
        """Initialize with the table and the missing column.

        Args:
            table: Table whose header was searched.
            column: Column name that was not found.
        """
        super().__init__(
            f"Configuration error: column '{column}' not found in table '{table}'. "
            "Check the table setup.",
            "SCHEMA_ERROR",
            {"table": table, "column": column},
        )


class IdAllocationRetryExhaustedException(ShopLedgerException):
    """Raised when allocation keeps failing after every retry attempt.

    Retryable: every attempt hit a transient fault, so a later call may succeed.
    """

    is_retryable = True

    def __init__(self, prefix: str, attempts: int, last_error: str) -> None:
        """Initialize with prefix, attempt count, and the last failure message.

        Args:
            prefix: Identifier prefix being allocated.
            attempts: Number of attempts made.
            last_error: Message of the final failure.
        """
        super().__init__(
            f"Failed to allocate {prefix} ID after {attempts} attempts: {last_error}",
            "ID_ALLOCATION_FAILED",
            {"prefix": prefix, "attempts": attempts, "last_error": last_error},
        )


class ResourceNotFoundException(ShopLedgerException):
    """Raised when a requested record is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'sale', 'customer').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InsufficientStockException(ShopLedgerException):
    """Raised when a sale asks for more units than are in stock."""

    def __init__(self, item_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {item_id}: requested {requested}, available {available}",
            "INSUFFICIENT_STOCK",
            {"item_id": item_id, "requested": requested, "available": available},
        )
