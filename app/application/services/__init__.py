"""Application services: ID allocation, cached views, and record-table services."""

from app.application.services.cached_views import CachedViews
from app.application.services.compensation import CompensationLog
from app.application.services.customer_service import CustomerService
from app.application.services.dashboard_service import DashboardService
from app.application.services.financial_service import FinancialService
from app.application.services.id_allocator import IdAllocator
from app.application.services.inventory_service import InventoryService
from app.application.services.record_service import RecordService
from app.application.services.sales_service import PAYMENT_METHODS, SalesService
from app.application.services.supplier_service import SupplierService

__all__ = [
    "PAYMENT_METHODS",
    "CachedViews",
    "CompensationLog",
    "CustomerService",
    "DashboardService",
    "FinancialService",
    "IdAllocator",
    "InventoryService",
    "RecordService",
    "SalesService",
    "SupplierService",
]
