"""Application DTOs for users and their purchases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from core.domain.entities import PurchaseGrant, User


class RegisterUserRequest(BaseModel):
    telegram_id: int = Field(..., gt=0)
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserDTO(BaseModel):
    id: int
    telegram_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    joined_at: Optional[datetime] = None
    last_active: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        return cls(
            id=user.id,
            telegram_id=user.telegram_id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            joined_at=user.joined_at,
            last_active=user.last_active,
        )


class PurchasedProductDTO(BaseModel):
    """A product the user has paid for, with its delivery link."""

    product_id: int
    order_id: int
    product_name: Optional[str] = None
    download_link: Optional[str] = None
    granted_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, grant: PurchaseGrant) -> "PurchasedProductDTO":
        return cls(
            product_id=grant.product_id,
            order_id=grant.order_id,
            product_name=grant.product_name,
            download_link=grant.download_link,
            granted_at=grant.granted_at,
        )
