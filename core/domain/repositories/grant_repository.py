"""Repository interface for purchased product grants."""

from abc import ABC, abstractmethod
from typing import List

from ..entities.grant import PurchaseGrant


class GrantRepository(ABC):

    @abstractmethod
    async def grant_if_absent(self, user_id: int, product_id: int, order_id: int) -> bool:
        """Insert-or-ignore on the unique (user, product, order) tuple.

        Returns:
            True if a new grant row was created
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: int) -> List[PurchaseGrant]:
        """Grants of a user with product details, newest first."""
        pass

    @abstractmethod
    async def find_by_order(self, order_id: int) -> List[PurchaseGrant]:
        pass
