"""
Product entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects import Money


@dataclass
class Product:
    """A digital product offered in the storefront."""
    name: str
    price: Money
    stock: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None
    download_link: Optional[str] = None
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.stock < 0:
            raise ValueError(f"Stock cannot be negative: {self.stock}")
        if self.price.is_negative():
            raise ValueError(f"Price cannot be negative: {self.price}")
