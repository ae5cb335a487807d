"""Application service for Order operations."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import CreateOrderRequest, OrderDTO, OrderListDTO
from core.application.interfaces import IPaymentGateway
from core.data.uow import create_uow
from core.domain.entities import Invoice, Order, Product, RequestedLine, normalize_lines, reservation_order
from core.domain.exceptions import (
    GatewayError,
    OrderNotFoundError,
    OrderNotPayableError,
    ProductNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Validate requested lines and reserve stock in the order transaction
    - Provision invoices after the order is committed
    - Transform between DTOs and domain entities
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        default_currency: str = "BTC",
    ) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            gateway: Payment gateway used to provision invoices
            default_currency: Crypto currency used when a request names none
        """
        self._session_factory = session_factory
        self._gateway = gateway
        self._default_currency = default_currency

    async def create_order(self, request: CreateOrderRequest) -> Order:
        """Validate, reserve stock and persist a pending order atomically.

        Either every line is reserved and the order with all of its items is
        committed, or nothing is written at all.

        Args:
            request: CreateOrderRequest DTO

        Returns:
            Committed pending Order

        Raises:
            ValidationError: Empty order or non-positive quantity
            UserNotFoundError: Unknown Telegram id
            ProductNotFoundError: Unknown or inactive product
            InsufficientStockError: A line cannot be reserved
        """
        lines = normalize_lines(
            RequestedLine(product_id=line.product_id, quantity=line.quantity)
            for line in request.items
        )

        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id

            # 1. Resolve buyer
            user = await uow.users.find_by_telegram_id(request.telegram_id)
            if user is None:
                raise UserNotFoundError(request.telegram_id)

            # 2. Every product must exist and be active
            priced: List[tuple] = []
            for line in lines:
                product: Optional[Product] = await uow.products.find_by_id(line.product_id)
                if product is None:
                    logger.warning(f"[{execution_id}] Order rejected, product {line.product_id} not found")
                    raise ProductNotFoundError(line.product_id)
                priced.append((product, line.quantity))

            # 3. Reserve stock in product id order; any failure aborts the whole transaction
            for product, quantity in reservation_order(priced):
                await uow.inventory.reserve(product.id, quantity)

            # 4. Price snapshot and persist
            order = Order.place(user.id, priced)
            await uow.orders.add(order)

            # 5. Atomic commit
            await uow.commit()

            logger.info(
                f"[{execution_id}] ✅ Order {order.id} created for user {user.telegram_id}: "
                f"{len(order.items)} line(s), total {order.total_price}"
            )
            return order

    async def provision_invoice(self, order_id: int, currency: Optional[str] = None) -> Invoice:
        """Issue a new invoice for a pending order.

        The gateway is called outside any transaction; only the resulting
        invoice row is written. Stock is not touched.

        Args:
            order_id: Order id
            currency: Crypto currency, defaults to the configured one

        Returns:
            Persisted Invoice

        Raises:
            OrderNotFoundError: Unknown order
            OrderNotPayableError: Order is no longer pending
            GatewayError: Gateway failure, carrying the order id
        """
        currency = (currency or self._default_currency).upper()

        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.is_pending:
            raise OrderNotPayableError(order_id, order.status.value)

        try:
            invoice = await self._gateway.create_invoice(order, currency)
        except GatewayError as e:
            logger.error(f"❌ Invoice provisioning failed for order {order_id}: {e.message}")
            if e.order_id is None:
                raise GatewayError(e.message, order_id=order_id) from e
            raise

        uow = create_uow(self._session_factory)
        async with uow:
            invoice = await uow.invoices.add(invoice)
            await uow.commit()
            logger.info(
                f"[{uow.execution_id}] ✅ Invoice {invoice.external_invoice_id} "
                f"({invoice.currency}) stored for order {order_id}"
            )
        return invoice

    async def checkout(self, request: CreateOrderRequest) -> OrderDTO:
        """Create an order and provision its first invoice.

        Args:
            request: CreateOrderRequest DTO

        Returns:
            OrderDTO including the invoice summary
        """
        order = await self.create_order(request)
        invoice = await self.provision_invoice(order.id, request.currency)
        return OrderDTO.from_entity(order, invoice)

    async def reissue_invoice(self, order_id: int, currency: Optional[str] = None) -> OrderDTO:
        """Provision a fresh invoice for a still-pending order."""
        await self.provision_invoice(order_id, currency)
        return await self.get_order(order_id)

    async def get_order(self, order_id: int) -> OrderDTO:
        """Get order with items and latest invoice.

        Args:
            order_id: Order id

        Returns:
            OrderDTO

        Raises:
            OrderNotFoundError: Unknown order
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            invoice = await uow.invoices.find_latest_for_order(order_id)
            return OrderDTO.from_entity(order, invoice)

    async def list_orders(self, limit: int = 100, offset: int = 0) -> OrderListDTO:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            OrderListDTO
        """
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_all(limit=limit, offset=offset)
            dtos = [OrderDTO.from_entity(order) for order in orders]
            return OrderListDTO(orders=dtos, total=len(dtos))

    async def list_user_orders(self, telegram_id: int, limit: int = 100) -> OrderListDTO:
        uow = create_uow(self._session_factory)
        async with uow:
            user = await uow.users.find_by_telegram_id(telegram_id)
            if user is None:
                raise UserNotFoundError(telegram_id)
            orders = await uow.orders.find_by_user(user.id, limit=limit)
            dtos = []
            for order in orders:
                invoice = await uow.invoices.find_latest_for_order(order.id)
                dtos.append(OrderDTO.from_entity(order, invoice))
            return OrderListDTO(orders=dtos, total=len(dtos))
