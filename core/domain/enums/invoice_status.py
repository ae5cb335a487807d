"""
Invoice Status Enum.

Internal invoice lifecycle: new -> pending -> {completed, expired, cancelled}.
"""
from enum import Enum


class InvoiceStatus(str, Enum):
    """Invoice status values."""
    
    NEW = "new"
    PENDING = "pending"
    COMPLETED = "completed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
