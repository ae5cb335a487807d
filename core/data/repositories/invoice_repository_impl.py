"""SQLAlchemy implementation of InvoiceRepository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Invoice
from core.domain.enums import InvoiceStatus
from core.domain.repositories import InvoiceRepository
from core.domain.services import predecessors_of

from ..mappers import InvoiceMapper, as_utc
from ..models import InvoiceModel


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """Concrete implementation of InvoiceRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, invoice: Invoice) -> Invoice:
        model = InvoiceMapper.to_persistence(invoice)
        self._session.add(model)
        await self._session.flush()

        invoice.id = model.id
        invoice.created_at = as_utc(model.created_at)
        return invoice

    async def find_by_external_id(self, external_invoice_id: str) -> Optional[Invoice]:
        result = await self._session.execute(
            select(InvoiceModel).where(InvoiceModel.external_invoice_id == external_invoice_id)
        )
        model = result.scalar_one_or_none()
        return InvoiceMapper.to_domain(model) if model else None

    async def find_latest_for_order(self, order_id: int) -> Optional[Invoice]:
        invoices = await self.find_for_order(order_id)
        return invoices[0] if invoices else None

    async def find_for_order(self, order_id: int) -> List[Invoice]:
        result = await self._session.execute(
            select(InvoiceModel)
            .where(InvoiceModel.order_id == order_id)
            .order_by(InvoiceModel.created_at.desc(), InvoiceModel.id.desc())
        )
        return [InvoiceMapper.to_domain(model) for model in result.scalars().all()]

    async def transition(
        self,
        invoice_id: int,
        incoming: InvoiceStatus,
        paid_at: Optional[datetime] = None,
    ) -> bool:
        allowed_from = [status.value for status in predecessors_of(incoming)]
        if not allowed_from:
            return False

        values = {"status": incoming.value}
        if paid_at is not None:
            values["paid_at"] = paid_at

        result = await self._session.execute(
            update(InvoiceModel)
            .where(
                InvoiceModel.id == invoice_id,
                InvoiceModel.status.in_(allowed_from),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
