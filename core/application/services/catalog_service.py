"""Application service for the product catalog."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.product_dto import CreateProductRequest, ProductDTO, UpdateProductRequest
from core.data.uow import create_uow
from core.domain.entities import Product
from core.domain.exceptions import ValidationError
from core.domain.value_objects import Money

logger = logging.getLogger(__name__)


class ProductCatalogService:
    """Admin and public catalog operations. Lookups return None when missing."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def list_products(self) -> List[ProductDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            products = await uow.products.find_active()
            return [ProductDTO.from_entity(product) for product in products]

    async def get_product(self, product_id: int) -> Optional[ProductDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            product = await uow.products.find_by_id(product_id)
            return ProductDTO.from_entity(product) if product else None

    async def create_product(self, request: CreateProductRequest) -> ProductDTO:
        product = Product(
            name=request.name,
            description=request.description,
            price=Money(amount=request.price),
            stock=request.stock,
            image_url=request.image_url,
            download_link=request.download_link,
        )

        uow = create_uow(self._session_factory)
        async with uow:
            product = await uow.products.add(product)
            await uow.commit()
            logger.info(f"[{uow.execution_id}] ✅ Product {product.id} '{product.name}' created")
            return ProductDTO.from_entity(product)

    async def update_product(self, product_id: int, request: UpdateProductRequest) -> Optional[ProductDTO]:
        """Apply the fields present in the request to an existing product."""
        changes = request.model_dump(exclude_unset=True)
        if "price" in changes:
            if changes["price"] is None:
                raise ValidationError("Price cannot be null")
            changes["price"] = Money(amount=changes["price"])
        for required in ("name", "stock", "is_active"):
            if required in changes and changes[required] is None:
                raise ValidationError(f"{required} cannot be null")

        uow = create_uow(self._session_factory)
        async with uow:
            product = await uow.products.update(product_id, changes)
            if product is None:
                return None
            await uow.commit()
            logger.info(f"[{uow.execution_id}] Product {product_id} updated: {sorted(changes)}")
            return ProductDTO.from_entity(product)

    async def delete_product(self, product_id: int) -> bool:
        """Soft delete: the product disappears from the catalog, history stays intact."""
        uow = create_uow(self._session_factory)
        async with uow:
            deleted = await uow.products.deactivate(product_id)
            if deleted:
                await uow.commit()
                logger.info(f"[{uow.execution_id}] Product {product_id} deactivated")
            return deleted

    async def restock(self, product_id: int, quantity: int) -> Optional[ProductDTO]:
        if quantity <= 0:
            raise ValidationError(f"Restock quantity must be positive, got {quantity}")

        uow = create_uow(self._session_factory)
        async with uow:
            if not await uow.inventory.restock(product_id, quantity):
                return None
            product = await uow.products.find_by_id(product_id, include_inactive=True)
            await uow.commit()
            logger.info(f"[{uow.execution_id}] Product {product_id} restocked +{quantity} (now {product.stock})")
            return ProductDTO.from_entity(product)
