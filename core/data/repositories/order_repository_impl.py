"""SQLAlchemy implementation of OrderRepository."""

from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import case, distinct, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Order
from core.domain.enums import OrderStatus
from core.domain.repositories import DailyEarnings, OrderRepository, SalesSummary

from ..mappers import OrderMapper, as_utc, to_money
from ..models import OrderModel
from ..models.base import utcnow


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> Order:
        """Persist a new order aggregate with its items.

        Args:
            order: Order domain aggregate

        Returns:
            The order with ids and timestamps filled in
        """
        model = OrderMapper.to_persistence(order)
        self._session.add(model)
        await self._session.flush()  # Propagate to DB without committing

        order.id = model.id
        order.created_at = as_utc(model.created_at)
        order.updated_at = as_utc(model.updated_at)
        for item, item_model in zip(order.items, model.items):
            item.id = item_model.id
        return order

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        """Retrieve order by id.

        Args:
            order_id: Order id

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_by_user(self, user_id: int, limit: int = 100) -> List[Order]:
        result = await self._session.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
        )
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates, newest first
        """
        result = await self._session.execute(
            select(OrderModel)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        models = result.scalars().all()

        return [OrderMapper.to_domain(model) for model in models]

    async def mark_paid(self, order_id: int) -> bool:
        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status == OrderStatus.PENDING.value,
            )
            .values(status=OrderStatus.PAID.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def summary(self) -> SalesSummary:
        paid = OrderModel.status == OrderStatus.PAID.value
        result = await self._session.execute(
            select(
                func.count(case((paid, 1))),
                func.count(case((OrderModel.status == OrderStatus.PENDING.value, 1))),
                func.coalesce(func.sum(case((paid, OrderModel.total_price))), 0),
                func.count(distinct(OrderModel.user_id)),
            )
        )
        paid_count, pending_count, revenue, customers = result.one()
        return SalesSummary(
            total_paid_orders=paid_count or 0,
            pending_orders=pending_count or 0,
            total_revenue=to_money(revenue),
            unique_customers=customers or 0,
        )

    async def daily_earnings(self, days: int = 30) -> List[DailyEarnings]:
        day = func.date(OrderModel.created_at)
        result = await self._session.execute(
            select(
                day.label("day"),
                func.count(OrderModel.id),
                func.sum(OrderModel.total_price),
            )
            .where(
                OrderModel.status == OrderStatus.PAID.value,
                OrderModel.created_at >= utcnow() - timedelta(days=days),
            )
            .group_by(day)
            .order_by(day.desc())
        )
        return [
            DailyEarnings(
                day=_as_date(row_day),
                orders_count=count,
                total_earnings=to_money(total),
            )
            for row_day, count, total in result.all()
        ]


def _as_date(value) -> date:
    # SQLite's date() yields 'YYYY-MM-DD' text
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value
