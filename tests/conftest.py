"""Shared fixtures: a file-backed SQLite store per test and seeding helpers."""

from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from core.application.services import OrderApplicationService, WebhookReconciler
from core.data.uow import create_uow
from core.domain.entities import Product, User
from core.domain.value_objects import Money
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.database.config import create_engine, create_session_factory, init_database

from tests.mocks.fake_gateway import FakePaymentGateway

BUYER_TELEGRAM_ID = 555000111


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh schema in a temporary SQLite file."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await init_database(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def notifier() -> MockNotificationService:
    return MockNotificationService()


@pytest.fixture
def order_service(session_factory, gateway) -> OrderApplicationService:
    return OrderApplicationService(session_factory, gateway, default_currency="BTC")


@pytest.fixture
def reconciler(session_factory, gateway, notifier) -> WebhookReconciler:
    return WebhookReconciler(session_factory, gateway, notifier)


@pytest_asyncio.fixture
async def buyer(session_factory) -> User:
    async with create_uow(session_factory) as uow:
        user = await uow.users.upsert(
            User(telegram_id=BUYER_TELEGRAM_ID, username="alice", first_name="Alice", last_name="Doe")
        )
        await uow.commit()
        return user


@pytest.fixture
def make_product(session_factory):
    """Factory fixture inserting a product and returning it with its id."""

    async def _make(
        name: str = "E-book",
        price: str = "10.00",
        stock: int = 5,
        download_link: Optional[str] = None,
        is_active: bool = True,
    ) -> Product:
        async with create_uow(session_factory) as uow:
            product = await uow.products.add(
                Product(
                    name=name,
                    price=Money(amount=Decimal(price)),
                    stock=stock,
                    download_link=download_link or f"https://files.test/{name.lower().replace(' ', '-')}",
                    is_active=is_active,
                )
            )
            await uow.commit()
            return product

    return _make


@pytest.fixture
def stock_of(session_factory):
    async def _stock(product_id: int) -> Optional[int]:
        async with create_uow(session_factory) as uow:
            return await uow.inventory.available(product_id)

    return _stock


@pytest.fixture
def count_rows(session_factory):
    """Count rows of an ORM model."""

    async def _count(model) -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count
