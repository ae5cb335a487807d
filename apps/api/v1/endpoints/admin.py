"""Admin-only reporting endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query

from core.application.dtos.order_dto import OrderListDTO
from core.application.dtos.stats_dto import SalesStatsDTO
from core.application.dtos.user_dto import UserDTO
from core.application.services import OrderApplicationService, ReportingService, UserService

from apps.api.deps import get_order_service, get_reporting_service, get_user_service, require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/orders", response_model=OrderListDTO)
async def list_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    offset: int = Query(default=0, ge=0),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List orders with pagination.

    Args:
        limit: Maximum number of orders to return
        offset: Number of orders to skip
        service: OrderApplicationService instance

    Returns:
        OrderListDTO, newest first
    """
    return await service.list_orders(limit=limit, offset=offset)


@router.get("/stats", response_model=SalesStatsDTO)
async def sales_stats(
    service: ReportingService = Depends(get_reporting_service),
) -> SalesStatsDTO:
    """Order totals and daily earnings over the last 30 days."""
    return await service.sales_stats(days=30)


@router.get("/users", response_model=List[UserDTO])
async def list_users(
    service: UserService = Depends(get_user_service),
) -> List[UserDTO]:
    return await service.list_users()
