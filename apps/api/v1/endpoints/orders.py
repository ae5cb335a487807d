"""Order endpoints for REST API."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from core.application.dtos.order_dto import (
    CreateOrderRequest,
    OrderDTO,
    ProvisionInvoiceRequest,
)
from core.application.services import OrderApplicationService

from apps.api.deps import get_order_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderDTO, status_code=201)
async def create_order(
    request: CreateOrderRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Create a new order and its payment invoice.

    Stock is reserved and the order committed before the gateway is
    called; a gateway failure (502) therefore still reports the order id.

    Args:
        request: CreateOrderRequest DTO
        service: OrderApplicationService instance

    Returns:
        OrderDTO with items and invoice summary
    """
    return await service.checkout(request)


@router.get("/{order_id}", response_model=OrderDTO)
async def get_order(
    order_id: int,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Get order with items and latest invoice.

    Args:
        order_id: Order id
        service: OrderApplicationService instance

    Returns:
        OrderDTO with order details
    """
    return await service.get_order(order_id)


@router.post("/{order_id}/invoice", response_model=OrderDTO, status_code=201)
async def reissue_invoice(
    order_id: int,
    request: Optional[ProvisionInvoiceRequest] = None,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Issue a new invoice for a still-pending order (stock is not reserved again)."""
    currency = request.currency if request else None
    return await service.reissue_invoice(order_id, currency)

