"""Integration tests for catalog administration, admin reports and health."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from tests.mocks.fake_gateway import callback_payload


@pytest.mark.asyncio
async def test_public_catalog_hides_download_links(test_client: AsyncClient, product):
    response = await test_client.get("/api/v1/products")

    assert response.status_code == 200
    listed = response.json()
    assert [p["id"] for p in listed] == [product["id"]]
    assert "download_link" not in listed[0]
    assert Decimal(listed[0]["price"]) == Decimal("25.00")


@pytest.mark.asyncio
async def test_get_missing_product(test_client: AsyncClient):
    response = await test_client.get("/api/v1/products/404")

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"X-Telegram-Id": "123"}, {"X-Telegram-Id": "not-a-number"}])
async def test_catalog_writes_require_admin(test_client: AsyncClient, headers):
    response = await test_client.post(
        "/api/v1/products", json={"name": "Course", "price": "1.00"}, headers=headers
    )

    assert response.status_code == 403
    assert response.json()["error"] == "AdminAccessRequired"


@pytest.mark.asyncio
async def test_update_restock_and_delete(test_client: AsyncClient, admin_headers, product):
    product_url = f"/api/v1/products/{product['id']}"

    updated = await test_client.put(product_url, json={"price": "30.00"}, headers=admin_headers)
    assert updated.status_code == 200
    assert Decimal(updated.json()["price"]) == Decimal("30.00")
    assert updated.json()["name"] == "Course"

    restocked = await test_client.post(f"{product_url}/restock", json={"quantity": 10}, headers=admin_headers)
    assert restocked.status_code == 200
    assert restocked.json()["stock"] == 15

    deleted = await test_client.delete(product_url, headers=admin_headers)
    assert deleted.status_code == 204
    assert (await test_client.get(product_url)).status_code == 404


@pytest.mark.asyncio
async def test_admin_writes_on_missing_product(test_client: AsyncClient, admin_headers):
    assert (await test_client.put("/api/v1/products/404", json={"name": "x"}, headers=admin_headers)).status_code == 404
    assert (
        await test_client.post("/api/v1/products/404/restock", json={"quantity": 1}, headers=admin_headers)
    ).status_code == 404


@pytest.mark.asyncio
async def test_restock_requires_positive_quantity(test_client: AsyncClient, admin_headers, product):
    response = await test_client.post(
        f"/api/v1/products/{product['id']}/restock", json={"quantity": 0}, headers=admin_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_reports_require_admin(test_client: AsyncClient):
    for path in ("/api/v1/admin/orders", "/api/v1/admin/stats", "/api/v1/admin/users"):
        response = await test_client.get(path)
        assert response.status_code == 403, path


@pytest.mark.asyncio
async def test_admin_stats_and_listings(test_client: AsyncClient, admin_headers, customer, product):
    paid = (
        await test_client.post(
            "/api/v1/orders",
            json={"telegram_id": customer["telegram_id"], "items": [{"product_id": product["id"], "quantity": 2}]},
        )
    ).json()
    await test_client.post(
        "/api/v1/webhooks/plisio?json=true",
        json=callback_payload(paid["invoice"]["external_invoice_id"], "completed"),
    )
    await test_client.post(
        "/api/v1/orders",
        json={"telegram_id": customer["telegram_id"], "items": [{"product_id": product["id"], "quantity": 1}]},
    )

    stats = (await test_client.get("/api/v1/admin/stats", headers=admin_headers)).json()
    assert stats["total_paid_orders"] == 1
    assert stats["pending_orders"] == 1
    assert Decimal(stats["total_revenue"]) == Decimal("50.00")
    assert stats["unique_customers"] == 1
    assert len(stats["daily_earnings"]) == 1

    orders = (await test_client.get("/api/v1/admin/orders?limit=10", headers=admin_headers)).json()
    assert orders["total"] == 2
    assert {o["status"] for o in orders["orders"]} == {"paid", "pending"}

    users = (await test_client.get("/api/v1/admin/users", headers=admin_headers)).json()
    assert [u["telegram_id"] for u in users] == [customer["telegram_id"]]


@pytest.mark.asyncio
async def test_health_endpoints(test_client: AsyncClient):
    assert (await test_client.get("/health")).json()["status"] == "healthy"

    ready = await test_client.get("/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "ok"
