"""Repository interfaces for products and their stock."""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from ..entities.product import Product


class ProductRepository(ABC):
    """Abstract repository for catalog products."""

    @abstractmethod
    async def find_by_id(self, product_id: int, include_inactive: bool = False) -> Optional[Product]:
        """Retrieve a product.

        Args:
            product_id: Product id
            include_inactive: Also return soft-deleted products

        Returns:
            Product if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[Product]:
        """List active products, newest first."""
        pass

    @abstractmethod
    async def add(self, product: Product) -> Product:
        """Insert a product and return it with its id assigned."""
        pass

    @abstractmethod
    async def update(self, product_id: int, changes: Mapping[str, Any]) -> Optional[Product]:
        """Set only the given fields, in one statement.

        Fields not named in ``changes`` are never written.

        Returns:
            Updated product, or None if it does not exist
        """
        pass

    @abstractmethod
    async def deactivate(self, product_id: int) -> bool:
        """Soft delete. Returns False if the product does not exist."""
        pass


class InventoryLedger(ABC):
    """
    Per-product stock counters.

    All operations are single conditional statements that run inside the
    caller's transaction.
    """

    @abstractmethod
    async def reserve(self, product_id: int, quantity: int) -> None:
        """Decrement stock by ``quantity`` only if that many units remain.

        Raises:
            InsufficientStockError: If fewer than ``quantity`` units remain
        """
        pass

    @abstractmethod
    async def restock(self, product_id: int, quantity: int) -> bool:
        """Add units to a product. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def available(self, product_id: int) -> Optional[int]:
        """Current stock, or None if the product does not exist."""
        pass
