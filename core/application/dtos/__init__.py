"""Application DTOs."""

from .order_dto import (
    CreateOrderRequest,
    InvoiceDTO,
    OrderDTO,
    OrderItemDTO,
    OrderLineRequest,
    OrderListDTO,
    ProvisionInvoiceRequest,
)
from .product_dto import CreateProductRequest, ProductDTO, RestockRequest, UpdateProductRequest
from .stats_dto import DailyEarningsDTO, SalesStatsDTO
from .user_dto import PurchasedProductDTO, RegisterUserRequest, UserDTO
from .webhook_dto import WebhookAckDTO

__all__ = [
    "CreateOrderRequest",
    "CreateProductRequest",
    "DailyEarningsDTO",
    "InvoiceDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderLineRequest",
    "OrderListDTO",
    "ProductDTO",
    "ProvisionInvoiceRequest",
    "PurchasedProductDTO",
    "RegisterUserRequest",
    "RestockRequest",
    "SalesStatsDTO",
    "UpdateProductRequest",
    "UserDTO",
    "WebhookAckDTO",
]
