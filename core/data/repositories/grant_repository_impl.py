"""SQLAlchemy implementation of GrantRepository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import PurchaseGrant
from core.domain.repositories import GrantRepository

from ..mappers import GrantMapper
from ..models import PurchaseGrantModel

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyGrantRepository(GrantRepository):
    """
    Grant rows keyed by the unique (user_id, product_id, order_id) tuple.

    PostgreSQL and SQLite use ``INSERT ... ON CONFLICT DO NOTHING``; other
    dialects fall back to a savepoint around a plain insert.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def grant_if_absent(self, user_id: int, product_id: int, order_id: int) -> bool:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)

        if insert is None:
            try:
                async with self._session.begin_nested():
                    self._session.add(
                        PurchaseGrantModel(user_id=user_id, product_id=product_id, order_id=order_id)
                    )
            except IntegrityError:
                return False
            return True

        stmt = (
            insert(PurchaseGrantModel)
            .values(user_id=user_id, product_id=product_id, order_id=order_id)
            .on_conflict_do_nothing(index_elements=["user_id", "product_id", "order_id"])
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def find_by_user(self, user_id: int) -> List[PurchaseGrant]:
        result = await self._session.execute(
            select(PurchaseGrantModel)
            .where(PurchaseGrantModel.user_id == user_id)
            .order_by(PurchaseGrantModel.granted_at.desc(), PurchaseGrantModel.id.desc())
        )
        return [GrantMapper.to_domain(model) for model in result.scalars().all()]

    async def find_by_order(self, order_id: int) -> List[PurchaseGrant]:
        result = await self._session.execute(
            select(PurchaseGrantModel)
            .where(PurchaseGrantModel.order_id == order_id)
            .order_by(PurchaseGrantModel.id)
        )
        return [GrantMapper.to_domain(model) for model in result.scalars().all()]
