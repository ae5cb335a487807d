"""Repository interface for storefront users."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.user import User


class UserRepository(ABC):

    @abstractmethod
    async def find_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Register a user, or refresh names and last activity if known."""
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        """All users, most recently joined first."""
        pass
