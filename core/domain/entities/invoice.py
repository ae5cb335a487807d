"""
Invoice entity.

An invoice is the durable proof of one payment attempt for an order. An
order may accumulate several invoices (re-provisioning creates a new one);
webhooks always resolve by ``external_invoice_id``.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..enums import InvoiceStatus
from ..value_objects import Money


@dataclass
class Invoice:
    order_id: int
    external_invoice_id: str
    currency: str
    amount_usd: Money
    crypto_amount: Optional[Decimal] = None
    status: InvoiceStatus = InvoiceStatus.NEW
    invoice_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    wallet_hash: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
