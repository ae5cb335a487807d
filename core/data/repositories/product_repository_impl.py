"""SQLAlchemy implementations of ProductRepository and InventoryLedger."""

from typing import Any, List, Mapping, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import Product
from core.domain.exceptions import InsufficientStockError
from core.domain.repositories import InventoryLedger, ProductRepository
from core.domain.value_objects import Money

from ..mappers import ProductMapper
from ..models import ProductModel

# Columns an admin edit may touch
_UPDATABLE_COLUMNS = frozenset(
    ["name", "description", "price", "stock", "image_url", "download_link", "is_active"]
)


class SqlAlchemyProductRepository(ProductRepository):
    """Concrete implementation of ProductRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, product_id: int, include_inactive: bool = False) -> Optional[Product]:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        if not include_inactive:
            stmt = stmt.where(ProductModel.is_active.is_(True))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return ProductMapper.to_domain(model) if model else None

    async def find_active(self) -> List[Product]:
        result = await self._session.execute(
            select(ProductModel)
            .where(ProductModel.is_active.is_(True))
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        )
        return [ProductMapper.to_domain(model) for model in result.scalars().all()]

    async def add(self, product: Product) -> Product:
        model = ProductMapper.to_persistence(product)
        self._session.add(model)
        await self._session.flush()
        return ProductMapper.to_domain(model)

    async def update(self, product_id: int, changes: Mapping[str, Any]) -> Optional[Product]:
        columns = {
            name: (value.amount if isinstance(value, Money) else value)
            for name, value in changes.items()
            if name in _UPDATABLE_COLUMNS
        }
        if columns:
            result = await self._session.execute(
                update(ProductModel)
                .where(ProductModel.id == product_id)
                .values(**columns)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                return None

        result = await self._session.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return ProductMapper.to_domain(model) if model else None

    async def deactivate(self, product_id: int) -> bool:
        result = await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


class SqlAlchemyInventoryLedger(InventoryLedger):
    """
    Stock counters on the products table.

    ``reserve`` is one guarded UPDATE: the database either applies the whole
    decrement or nothing, and the affected-row count tells which. Competing
    transactions block on the row lock, so stock can never go below zero.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def reserve(self, product_id: int, quantity: int) -> None:
        result = await self._session.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.is_active.is_(True),
                ProductModel.stock >= quantity,
            )
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            available = await self.available(product_id)
            raise InsufficientStockError(product_id, quantity, available)

    async def restock(self, product_id: int, quantity: int) -> bool:
        result = await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def available(self, product_id: int) -> Optional[int]:
        result = await self._session.execute(
            select(ProductModel.stock).where(ProductModel.id == product_id)
        )
        return result.scalar_one_or_none()
