"""Repository interfaces."""
from .grant_repository import GrantRepository
from .invoice_repository import InvoiceRepository
from .order_repository import DailyEarnings, OrderRepository, SalesSummary
from .product_repository import InventoryLedger, ProductRepository
from .user_repository import UserRepository

__all__ = [
    "DailyEarnings",
    "GrantRepository",
    "InventoryLedger",
    "InvoiceRepository",
    "OrderRepository",
    "ProductRepository",
    "SalesSummary",
    "UserRepository",
]
