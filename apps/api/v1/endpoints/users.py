"""User registry endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from core.application.dtos.order_dto import OrderListDTO
from core.application.dtos.user_dto import PurchasedProductDTO, RegisterUserRequest, UserDTO
from core.application.services import OrderApplicationService, UserService

from apps.api.deps import get_order_service, get_user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserDTO)
async def register_user(
    request: RegisterUserRequest,
    service: UserService = Depends(get_user_service),
) -> UserDTO:
    """Register a chat user, or refresh their profile if already known."""
    return await service.register(request)


@router.get("/{telegram_id}/orders", response_model=OrderListDTO)
async def list_user_orders(
    telegram_id: int,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    return await service.list_user_orders(telegram_id)


@router.get("/{telegram_id}/purchases", response_model=List[PurchasedProductDTO])
async def list_user_purchases(
    telegram_id: int,
    service: UserService = Depends(get_user_service),
) -> List[PurchasedProductDTO]:
    """Products the user has paid for, with download links."""
    return await service.purchases(telegram_id)
