"""Integration tests for order and user endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from core.domain.exceptions import GatewayError


def order_body(product_id: int, quantity: int = 1, telegram_id: int = 555000111, **extra) -> dict:
    return {"telegram_id": telegram_id, "items": [{"product_id": product_id, "quantity": quantity}], **extra}


@pytest.mark.asyncio
async def test_create_order_returns_invoice(test_client: AsyncClient, customer, product):
    """POST /orders reserves stock and returns the first invoice."""
    response = await test_client.post("/api/v1/orders", json=order_body(product["id"], 2, currency="ltc"))

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["status"] == "pending"
    assert Decimal(data["total_price"]) == Decimal("50.00")
    assert data["items"][0]["product_name"] == "Course"
    assert Decimal(data["items"][0]["unit_price"]) == Decimal("25.00")
    assert data["invoice"]["status"] == "new"
    assert data["invoice"]["currency"] == "LTC"
    assert data["invoice"]["invoice_url"]

    get_response = await test_client.get(f"/api/v1/orders/{data['id']}")
    assert get_response.status_code == 200
    assert get_response.json()["invoice"]["external_invoice_id"] == data["invoice"]["external_invoice_id"]

    product_response = await test_client.get(f"/api/v1/products/{product['id']}")
    assert product_response.json()["stock"] == 3


@pytest.mark.asyncio
async def test_insufficient_stock_is_a_conflict(test_client: AsyncClient, customer, product):
    response = await test_client.post("/api/v1/orders", json=order_body(product["id"], 6))

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "InsufficientStock"
    assert body["product_id"] == product["id"]
    assert body["available"] == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -1])
async def test_non_positive_quantity_is_rejected(test_client: AsyncClient, customer, product, quantity):
    response = await test_client.post("/api/v1/orders", json=order_body(product["id"], quantity))

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


@pytest.mark.asyncio
async def test_empty_order_is_rejected(test_client: AsyncClient, customer):
    response = await test_client.post("/api/v1/orders", json={"telegram_id": 555000111, "items": []})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_malformed_body_is_a_validation_error(test_client: AsyncClient):
    response = await test_client.post("/api/v1/orders", json={"items": "nope"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert response.json()["errors"]


@pytest.mark.asyncio
async def test_unknown_product_is_rejected(test_client: AsyncClient, customer):
    response = await test_client.post("/api/v1/orders", json=order_body(9999))

    assert response.status_code == 400
    assert response.json()["error"] == "ProductNotFound"


@pytest.mark.asyncio
async def test_unknown_user_cannot_order(test_client: AsyncClient, product):
    response = await test_client.post("/api/v1/orders", json=order_body(product["id"], telegram_id=1))

    assert response.status_code == 404
    assert response.json()["error"] == "UserNotFound"


@pytest.mark.asyncio
async def test_gateway_failure_reports_order_id(test_client: AsyncClient, gateway, customer, product):
    gateway.fail_with = GatewayError("Payment gateway timed out")

    response = await test_client.post("/api/v1/orders", json=order_body(product["id"]))

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "GatewayError"
    order_id = body["order_id"]

    gateway.fail_with = None
    retry = await test_client.post(f"/api/v1/orders/{order_id}/invoice")
    assert retry.status_code == 201
    assert retry.json()["invoice"]["status"] == "new"


@pytest.mark.asyncio
async def test_reissue_invoice_with_currency(test_client: AsyncClient, customer, product):
    created = (await test_client.post("/api/v1/orders", json=order_body(product["id"]))).json()

    response = await test_client.post(f"/api/v1/orders/{created['id']}/invoice", json={"currency": "usdt"})

    assert response.status_code == 201
    assert response.json()["invoice"]["currency"] == "USDT"
    assert response.json()["invoice"]["external_invoice_id"] != created["invoice"]["external_invoice_id"]


@pytest.mark.asyncio
async def test_get_order_not_found(test_client: AsyncClient):
    response = await test_client.get("/api/v1/orders/12345")

    assert response.status_code == 404
    assert response.json()["error"] == "OrderNotFound"


@pytest.mark.asyncio
async def test_register_user_twice_keeps_one_user(test_client: AsyncClient, customer):
    response = await test_client.post("/api/v1/users", json={"telegram_id": 555000111, "username": "alice2"})

    assert response.status_code == 200
    assert response.json()["id"] == customer["id"]
    assert response.json()["username"] == "alice2"


@pytest.mark.asyncio
async def test_user_order_history(test_client: AsyncClient, customer, product):
    await test_client.post("/api/v1/orders", json=order_body(product["id"]))

    response = await test_client.get("/api/v1/users/555000111/orders")

    assert response.status_code == 200
    assert response.json()["total"] == 1

    missing = await test_client.get("/api/v1/users/1/orders")
    assert missing.status_code == 404
