"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities import Invoice, Order


class OrderLineRequest(BaseModel):
    """One requested line. Quantity is validated by the domain."""

    product_id: int = Field(..., description="Product id")
    quantity: int = Field(default=1, description="Units to buy")

    model_config = {"frozen": True}


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    telegram_id: int = Field(..., description="Buyer's Telegram id")
    items: List[OrderLineRequest] = Field(default_factory=list, description="Order items")
    currency: Optional[str] = Field(None, description="Crypto currency to pay in, e.g. BTC")

    model_config = {"frozen": True}


class ProvisionInvoiceRequest(BaseModel):
    """Request DTO for (re)issuing an invoice."""

    currency: Optional[str] = Field(None, description="Crypto currency to pay in")


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    product_id: int
    product_name: Optional[str] = None
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price at time of purchase")
    line_total: Decimal = Field(..., ge=0, description="unit_price * quantity")

    model_config = {"frozen": True}


class InvoiceDTO(BaseModel):
    """Invoice summary returned to the buyer."""

    external_invoice_id: str
    status: str
    currency: str
    amount_usd: Decimal
    crypto_amount: Optional[Decimal] = None
    invoice_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    wallet_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceDTO":
        return cls(
            external_invoice_id=invoice.external_invoice_id,
            status=invoice.status.value,
            currency=invoice.currency,
            amount_usd=invoice.amount_usd.amount,
            crypto_amount=invoice.crypto_amount,
            invoice_url=invoice.invoice_url,
            qr_code_url=invoice.qr_code_url,
            wallet_hash=invoice.wallet_hash,
            created_at=invoice.created_at,
            expires_at=invoice.expires_at,
            paid_at=invoice.paid_at,
        )


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: int
    user_id: int
    status: str
    total_price: Decimal = Field(..., ge=0, description="Total order amount")
    currency: str = Field(default="USD", description="Currency code")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    created_at: Optional[datetime] = None
    invoice: Optional[InvoiceDTO] = Field(None, description="Most recent invoice")

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order, invoice: Optional[Invoice] = None) -> "OrderDTO":
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            total_price=order.total_price.amount,
            currency=order.total_price.currency,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    line_total=item.line_total.amount,
                )
                for item in order.items
            ],
            created_at=order.created_at,
            invoice=InvoiceDTO.from_entity(invoice) if invoice else None,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Number of orders returned")

    model_config = {"frozen": True}
