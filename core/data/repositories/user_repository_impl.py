"""SQLAlchemy implementation of UserRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities import User
from core.domain.repositories import UserRepository

from ..mappers import UserMapper
from ..models import UserModel
from ..models.base import utcnow


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        result = await self._session.execute(
            select(UserModel).where(UserModel.telegram_id == telegram_id)
        )
        model = result.scalar_one_or_none()
        return UserMapper.to_domain(model) if model else None

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return UserMapper.to_domain(model) if model else None

    async def upsert(self, user: User) -> User:
        result = await self._session.execute(
            select(UserModel).where(UserModel.telegram_id == user.telegram_id)
        )
        model = result.scalar_one_or_none()

        if model is None:
            model = UserModel(
                telegram_id=user.telegram_id,
                username=user.username,
                first_name=user.first_name,
                last_name=user.last_name,
            )
            self._session.add(model)
        else:
            model.username = user.username
            model.first_name = user.first_name
            model.last_name = user.last_name
            model.last_active = utcnow()

        await self._session.flush()
        return UserMapper.to_domain(model)

    async def find_all(self) -> List[User]:
        result = await self._session.execute(
            select(UserModel).order_by(UserModel.joined_at.desc(), UserModel.id.desc())
        )
        return [UserMapper.to_domain(model) for model in result.scalars().all()]
