"""Purchased product grant entity."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PurchaseGrant:
    """Durable record that a user paid for a product within an order."""
    user_id: int
    product_id: int
    order_id: int
    granted_at: Optional[datetime] = None
    product_name: Optional[str] = None
    download_link: Optional[str] = None
