"""Domain enums."""
from .invoice_status import InvoiceStatus
from .order_status import OrderStatus

__all__ = ["InvoiceStatus", "OrderStatus"]
