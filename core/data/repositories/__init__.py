"""SQLAlchemy repository implementations."""

from .grant_repository_impl import SqlAlchemyGrantRepository
from .invoice_repository_impl import SqlAlchemyInvoiceRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .product_repository_impl import SqlAlchemyInventoryLedger, SqlAlchemyProductRepository
from .user_repository_impl import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyGrantRepository",
    "SqlAlchemyInventoryLedger",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyUserRepository",
]
