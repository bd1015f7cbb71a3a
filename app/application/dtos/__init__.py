"""Application DTOs: inputs and results of record-table use cases."""

from app.application.dtos.records import (
    CustomerCreate,
    ItemCreate,
    RefundCreate,
    RefundResult,
    SaleCreate,
    SaleResult,
    SupplierCreate,
    TransactionCreate,
)

__all__ = [
    "CustomerCreate",
    "ItemCreate",
    "RefundCreate",
    "RefundResult",
    "SaleCreate",
    "SaleResult",
    "SupplierCreate",
    "TransactionCreate",
]
