"""Application service for storefront users."""

import logging
from typing import List

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.user_dto import PurchasedProductDTO, RegisterUserRequest, UserDTO
from core.data.uow import create_uow
from core.domain.entities import User
from core.domain.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def register(self, request: RegisterUserRequest) -> UserDTO:
        """Create the user or refresh their profile if already known."""
        uow = create_uow(self._session_factory)
        async with uow:
            user = await uow.users.upsert(
                User(
                    telegram_id=request.telegram_id,
                    username=request.username,
                    first_name=request.first_name,
                    last_name=request.last_name,
                )
            )
            await uow.commit()
            logger.info(f"[{uow.execution_id}] User {user.telegram_id} registered")
            return UserDTO.from_entity(user)

    async def list_users(self) -> List[UserDTO]:
        uow = create_uow(self._session_factory)
        async with uow:
            users = await uow.users.find_all()
            return [UserDTO.from_entity(user) for user in users]

    async def purchases(self, telegram_id: int) -> List[PurchasedProductDTO]:
        """Products the user has been granted, newest first."""
        uow = create_uow(self._session_factory)
        async with uow:
            user = await uow.users.find_by_telegram_id(telegram_id)
            if user is None:
                raise UserNotFoundError(telegram_id)
            grants = await uow.grants.find_by_user(user.id)
            return [PurchasedProductDTO.from_entity(grant) for grant in grants]
