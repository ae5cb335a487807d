"""Sales reporting for admins."""

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.stats_dto import DailyEarningsDTO, SalesStatsDTO
from core.data.uow import create_uow


class ReportingService:

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def sales_stats(self, days: int = 30) -> SalesStatsDTO:
        """Totals across all orders plus paid earnings per day."""
        uow = create_uow(self._session_factory)
        async with uow:
            summary = await uow.orders.summary()
            daily = await uow.orders.daily_earnings(days=days)

        return SalesStatsDTO(
            total_paid_orders=summary.total_paid_orders,
            pending_orders=summary.pending_orders,
            total_revenue=summary.total_revenue.amount,
            unique_customers=summary.unique_customers,
            daily_earnings=[
                DailyEarningsDTO(
                    day=entry.day,
                    orders_count=entry.orders_count,
                    total_earnings=entry.total_earnings.amount,
                )
                for entry in daily
            ],
        )
