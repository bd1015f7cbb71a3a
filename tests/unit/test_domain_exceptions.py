"""Tests for domain exceptions (error_code, message, details, retryability)."""

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


def test_base_exception_default_error_code() -> None:
    """Base ShopLedgerException uses class name as error_code when not provided."""
    exc = ShopLedgerException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ShopLedgerException"
    assert exc.details == {}
    assert exc.is_retryable is False


def test_to_dict() -> None:
    exc = ShopLedgerException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid", field="quantity")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "quantity"}
    assert ValidationException("Invalid").details == {}


def test_busy_exception_is_retryable() -> None:
    exc = IdAllocationBusyException("id-allocation", 30.0)
    assert exc.error_code == "SYSTEM_BUSY"
    assert exc.is_retryable is True
    assert exc.message == "System busy: could not reserve a new ID, please retry shortly."
    assert exc.details == {"lock_name": "id-allocation", "timeout_seconds": 30.0}


def test_schema_errors_are_not_retryable() -> None:
    column = ColumnNotFoundException("Sales", "Sale_ID")
    table = TableNotFoundException("Sales")
    assert column.error_code == table.error_code == "SCHEMA_ERROR"
    assert not column.is_retryable
    assert not table.is_retryable
    assert column.message.startswith("Configuration error")
    assert column.details == {"table": "Sales", "column": "Sale_ID"}


def test_retry_exhausted_message() -> None:
    exc = IdAllocationRetryExhaustedException("SALE", 3, "System busy")
    assert exc.message == "Failed to allocate SALE ID after 3 attempts: System busy"
    assert exc.error_code == "ID_ALLOCATION_FAILED"
    assert exc.is_retryable is True


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("item", "ITEM-009")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "ITEM-009" in exc.message


def test_insufficient_stock() -> None:
    exc = InsufficientStockException("ITEM-001", 5, 2)
    assert exc.error_code == "INSUFFICIENT_STOCK"
    assert exc.details == {"item_id": "ITEM-001", "requested": 5, "available": 2}
