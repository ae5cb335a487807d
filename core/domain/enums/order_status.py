"""
Order Status Enum.

Lifecycle values for orders.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order status values."""
    
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
