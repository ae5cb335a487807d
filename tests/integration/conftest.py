"""Pytest configuration and fixtures for API integration tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from apps.api import deps
from apps.api.main import app
from core.domain.value_objects import AdminAllowList

ADMIN_TELEGRAM_ID = 900100200
ADMIN_HEADERS = {"X-Telegram-Id": str(ADMIN_TELEGRAM_ID)}


@pytest.fixture
def admin_headers() -> dict:
    return dict(ADMIN_HEADERS)


@pytest_asyncio.fixture
async def test_client(session_factory, gateway, notifier) -> AsyncGenerator[AsyncClient, None]:
    """API client wired to the per-test SQLite store, fake gateway and mock notifier."""
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_payment_gateway] = lambda: gateway
    app.dependency_overrides[deps.get_notification_service] = lambda: notifier
    app.dependency_overrides[deps.get_admin_allow_list] = lambda: AdminAllowList.of([ADMIN_TELEGRAM_ID])
    app.dependency_overrides[deps.get_default_currency] = lambda: "BTC"

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def product(test_client, admin_headers) -> dict:
    """A $25 product with 5 units, created through the admin API."""
    response = await test_client.post(
        "/api/v1/products",
        json={"name": "Course", "price": "25.00", "stock": 5, "download_link": "https://files.test/course"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def customer(test_client) -> dict:
    response = await test_client.post(
        "/api/v1/users",
        json={"telegram_id": 555000111, "username": "alice", "first_name": "Alice", "last_name": "Doe"},
    )
    assert response.status_code == 200, response.text
    return response.json()
