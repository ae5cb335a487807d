"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..entities.order import Order
from ..value_objects import Money


@dataclass(frozen=True)
class SalesSummary:
    """Aggregate sales figures across all orders."""
    total_paid_orders: int
    pending_orders: int
    total_revenue: Money
    unique_customers: int


@dataclass(frozen=True)
class DailyEarnings:
    day: date
    orders_count: int
    total_earnings: Money


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order with all of its items.

        Args:
            order: Order aggregate without ids

        Returns:
            The same order with database ids and timestamps assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int) -> Optional[Order]:
        """Retrieve order (with items) by id.

        Args:
            order_id: Order id

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: int, limit: int = 100) -> List[Order]:
        """List a user's orders, newest first."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders with pagination, newest first."""
        pass

    @abstractmethod
    async def mark_paid(self, order_id: int) -> bool:
        """Move a pending order to paid.

        Args:
            order_id: Order id

        Returns:
            True if this call performed the transition, False if the order
            was not pending
        """
        pass

    @abstractmethod
    async def summary(self) -> SalesSummary:
        """Totals across all orders."""
        pass

    @abstractmethod
    async def daily_earnings(self, days: int = 30) -> List[DailyEarnings]:
        """Paid orders grouped by creation day, newest first."""
        pass
