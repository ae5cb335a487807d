"""Domain entities."""
from .grant import PurchaseGrant
from .invoice import Invoice
from .order import Order, OrderItem, RequestedLine, normalize_lines, reservation_order
from .product import Product
from .user import User

__all__ = [
    "Invoice",
    "Order",
    "OrderItem",
    "Product",
    "PurchaseGrant",
    "RequestedLine",
    "User",
    "normalize_lines",
    "reservation_order",
]
