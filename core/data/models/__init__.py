"""Database models."""

from .base import Base
from .grant_model import PurchaseGrantModel
from .invoice_model import InvoiceModel
from .order_model import OrderItemModel, OrderModel
from .product_model import ProductModel
from .user_model import UserModel

__all__ = [
    "Base",
    "InvoiceModel",
    "OrderItemModel",
    "OrderModel",
    "ProductModel",
    "PurchaseGrantModel",
    "UserModel",
]
