"""Domain layer - pure domain models and interfaces."""

from .entities import Invoice, Order, OrderItem, Product, PurchaseGrant, User
from .enums import InvoiceStatus, OrderStatus
from .value_objects import AdminAllowList, ExecutionID, Money

__all__ = [
    "AdminAllowList",
    "ExecutionID",
    "Invoice",
    "InvoiceStatus",
    "Money",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "PurchaseGrant",
    "User",
]
