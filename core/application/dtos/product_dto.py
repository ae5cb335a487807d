"""Application DTOs for the product catalog."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from core.domain.entities import Product


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Unit price in USD")
    stock: int = Field(default=0, ge=0)
    image_url: Optional[str] = None
    download_link: Optional[str] = Field(None, description="Delivered to the buyer once paid")


class UpdateProductRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    download_link: Optional[str] = None
    is_active: Optional[bool] = None


class RestockRequest(BaseModel):
    quantity: int = Field(..., gt=0, description="Units to add")


class ProductDTO(BaseModel):
    """Public product view. The download link is never exposed here."""

    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    currency: str = "USD"
    stock: int
    image_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            stock=product.stock,
            image_url=product.image_url,
            is_active=product.is_active,
            created_at=product.created_at,
        )
