"""Webhook reconciliation: authentication, idempotency and fulfillment."""
import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from core.application.dtos.order_dto import CreateOrderRequest, OrderLineRequest
from core.application.services import ReconciliationOutcome, WebhookReconciler
from core.data.models import PurchaseGrantModel
from core.data.uow import create_uow
from core.domain.enums import InvoiceStatus
from core.domain.exceptions import InvoiceNotFoundError, ValidationError, WebhookAuthenticationError
from core.infrastructure.payments.plisio import compute_signature

from tests.conftest import BUYER_TELEGRAM_ID
from tests.mocks.fake_gateway import TEST_SECRET, callback_payload


@pytest.fixture
def place_paid_candidate(order_service, buyer, make_product):
    """A $100 order (one $60 course, two $20 sticker packs) with an open invoice."""

    async def _place():
        course = await make_product("Course", price="60.00", stock=5, download_link="https://files.test/course")
        stickers = await make_product("Stickers", price="20.00", stock=5)
        return await order_service.checkout(
            CreateOrderRequest(
                telegram_id=BUYER_TELEGRAM_ID,
                items=[
                    OrderLineRequest(product_id=course.id, quantity=1),
                    OrderLineRequest(product_id=stickers.id, quantity=2),
                ],
            )
        )

    return _place


async def grants_for(session_factory, order_id):
    async with create_uow(session_factory) as uow:
        return await uow.grants.find_by_order(order_id)


@pytest.mark.asyncio
async def test_completed_payment_marks_order_paid_and_grants_items(
    reconciler, order_service, session_factory, notifier, place_paid_candidate
):
    order = await place_paid_candidate()
    txn_id = order.invoice.external_invoice_id

    result = await reconciler.reconcile(callback_payload(txn_id, "completed"))

    assert result.outcome == ReconciliationOutcome.PAID
    assert result.invoice_status == InvoiceStatus.COMPLETED
    assert result.order_id == order.id

    paid = await order_service.get_order(order.id)
    assert paid.status == "paid"
    assert paid.invoice.status == "completed"
    assert paid.invoice.paid_at is not None

    grants = await grants_for(session_factory, order.id)
    assert sorted(g.product_name for g in grants) == ["Course", "Stickers"]

    sent = notifier.get_notifications()
    assert len(sent) == 1
    assert sent[0]["type"] == "payment_received"
    assert sent[0]["order_id"] == order.id
    assert sent[0]["telegram_id"] == BUYER_TELEGRAM_ID
    assert sent[0]["amount"] == Decimal("100.00")


@pytest.mark.asyncio
async def test_replayed_completion_is_a_no_op(reconciler, session_factory, notifier, place_paid_candidate):
    order = await place_paid_candidate()
    payload = callback_payload(order.invoice.external_invoice_id, "completed")

    first = await reconciler.reconcile(payload)
    second = await reconciler.reconcile(payload)

    assert first.outcome == ReconciliationOutcome.PAID
    assert second.outcome == ReconciliationOutcome.DUPLICATE
    assert second.invoice_status == InvoiceStatus.COMPLETED
    assert len(await grants_for(session_factory, order.id)) == 2
    assert len(notifier.get_notifications()) == 1


@pytest.mark.asyncio
async def test_concurrent_identical_deliveries_settle_once(
    reconciler, order_service, count_rows, notifier, place_paid_candidate
):
    order = await place_paid_candidate()
    payload = callback_payload(order.invoice.external_invoice_id, "completed")

    results = await asyncio.gather(*[reconciler.reconcile(dict(payload)) for _ in range(8)])

    outcomes = [r.outcome for r in results]
    assert outcomes.count(ReconciliationOutcome.PAID) == 1
    assert outcomes.count(ReconciliationOutcome.DUPLICATE) == 7
    assert await count_rows(PurchaseGrantModel) == 2
    assert len(notifier.get_notifications()) == 1
    assert (await order_service.get_order(order.id)).status == "paid"


@pytest.mark.asyncio
async def test_pending_then_completed(reconciler, order_service, notifier, place_paid_candidate):
    order = await place_paid_candidate()
    txn_id = order.invoice.external_invoice_id

    pending = await reconciler.reconcile(callback_payload(txn_id, "pending"))
    assert pending.outcome == ReconciliationOutcome.UPDATED
    assert (await order_service.get_order(order.id)).status == "pending"
    assert notifier.get_notifications() == []

    paid = await reconciler.reconcile(callback_payload(txn_id, "completed"))
    assert paid.outcome == ReconciliationOutcome.PAID


@pytest.mark.asyncio
async def test_late_pending_after_completion_does_not_regress(reconciler, order_service, place_paid_candidate):
    order = await place_paid_candidate()
    txn_id = order.invoice.external_invoice_id
    await reconciler.reconcile(callback_payload(txn_id, "completed"))

    result = await reconciler.reconcile(callback_payload(txn_id, "pending"))

    assert result.outcome == ReconciliationOutcome.DUPLICATE
    dto = await order_service.get_order(order.id)
    assert dto.invoice.status == "completed"
    assert dto.status == "paid"


@pytest.mark.asyncio
async def test_expired_invoice_still_settles_on_late_completion(
    reconciler, order_service, notifier, place_paid_candidate
):
    order = await place_paid_candidate()
    txn_id = order.invoice.external_invoice_id

    expired = await reconciler.reconcile(callback_payload(txn_id, "expired"))
    assert expired.outcome == ReconciliationOutcome.UPDATED
    assert (await order_service.get_order(order.id)).status == "pending"

    paid = await reconciler.reconcile(callback_payload(txn_id, "completed"))
    assert paid.outcome == ReconciliationOutcome.PAID
    assert (await order_service.get_order(order.id)).status == "paid"
    assert len(notifier.get_notifications()) == 1


@pytest.mark.asyncio
async def test_second_invoice_completion_does_not_refulfill(
    reconciler, order_service, count_rows, notifier, place_paid_candidate
):
    order = await place_paid_candidate()
    first_txn = order.invoice.external_invoice_id
    reissued = await order_service.reissue_invoice(order.id)

    await reconciler.reconcile(callback_payload(first_txn, "completed"))
    result = await reconciler.reconcile(callback_payload(reissued.invoice.external_invoice_id, "completed"))

    assert result.outcome == ReconciliationOutcome.UPDATED
    assert result.invoice_status == InvoiceStatus.COMPLETED
    assert await count_rows(PurchaseGrantModel) == 2
    assert len(notifier.get_notifications()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("field, value", [("status", "completed"), ("source_amount", "1.00"), ("amount", "9")])
async def test_tampered_payload_is_rejected(reconciler, order_service, place_paid_candidate, field, value):
    order = await place_paid_candidate()
    payload = callback_payload(order.invoice.external_invoice_id, "pending")
    payload[field] = value

    with pytest.raises(WebhookAuthenticationError):
        await reconciler.reconcile(payload)

    dto = await order_service.get_order(order.id)
    assert dto.invoice.status == "new"
    assert dto.status == "pending"


@pytest.mark.asyncio
async def test_payload_signed_with_other_secret_is_rejected(reconciler, place_paid_candidate):
    order = await place_paid_candidate()

    with pytest.raises(WebhookAuthenticationError):
        await reconciler.reconcile(
            callback_payload(order.invoice.external_invoice_id, "completed", secret="not-the-secret")
        )


@pytest.mark.asyncio
async def test_unsigned_payload_is_rejected(reconciler, place_paid_candidate):
    order = await place_paid_candidate()
    payload = callback_payload(order.invoice.external_invoice_id, "completed")
    del payload["verify_hash"]

    with pytest.raises(WebhookAuthenticationError):
        await reconciler.reconcile(payload)


@pytest.mark.asyncio
async def test_signature_header_is_accepted(reconciler, place_paid_candidate):
    order = await place_paid_candidate()
    payload = {"txn_id": order.invoice.external_invoice_id, "status": "completed"}

    result = await reconciler.reconcile(payload, signature=compute_signature(payload, TEST_SECRET))

    assert result.outcome == ReconciliationOutcome.PAID


@pytest.mark.asyncio
async def test_unknown_invoice_is_rejected(reconciler, buyer):
    with pytest.raises(InvoiceNotFoundError):
        await reconciler.reconcile(callback_payload("never-issued", "completed"))


@pytest.mark.asyncio
async def test_payload_without_invoice_id_is_invalid(reconciler):
    payload = {"status": "completed"}
    payload["verify_hash"] = compute_signature(payload, TEST_SECRET)

    with pytest.raises(ValidationError):
        await reconciler.reconcile(payload)


@pytest.mark.asyncio
async def test_unrecognised_status_is_ignored(reconciler, order_service, place_paid_candidate):
    order = await place_paid_candidate()

    result = await reconciler.reconcile(callback_payload(order.invoice.external_invoice_id, "refunded"))

    assert result.outcome == ReconciliationOutcome.IGNORED
    assert result.invoice_status == InvoiceStatus.NEW
    assert (await order_service.get_order(order.id)).invoice.status == "new"


@pytest.mark.asyncio
async def test_underpaid_mismatch_does_not_pay_order(
    reconciler, order_service, count_rows, notifier, place_paid_candidate
):
    order = await place_paid_candidate()

    result = await reconciler.reconcile(callback_payload(order.invoice.external_invoice_id, "mismatch"))

    assert result.outcome == ReconciliationOutcome.UPDATED
    assert result.invoice_status == InvoiceStatus.PENDING
    dto = await order_service.get_order(order.id)
    assert dto.status == "pending"
    assert dto.invoice.status == "pending"
    assert await count_rows(PurchaseGrantModel) == 0
    assert notifier.get_notifications() == []


@pytest.mark.asyncio
async def test_notification_failure_does_not_undo_payment(
    session_factory, gateway, order_service, place_paid_candidate
):
    notifier = AsyncMock()
    notifier.notify_payment_received.side_effect = RuntimeError("telegram down")
    reconciler = WebhookReconciler(session_factory, gateway, notifier)
    order = await place_paid_candidate()

    result = await reconciler.reconcile(callback_payload(order.invoice.external_invoice_id, "completed"))

    assert result.outcome == ReconciliationOutcome.PAID
    notifier.notify_payment_received.assert_awaited_once()
    assert (await order_service.get_order(order.id)).status == "paid"
    assert len(await grants_for(session_factory, order.id)) == 2


@pytest.mark.asyncio
async def test_notice_carries_download_links(reconciler, session_factory, gateway, place_paid_candidate):
    notifier = AsyncMock()
    reconciler = WebhookReconciler(session_factory, gateway, notifier)
    order = await place_paid_candidate()

    await reconciler.reconcile(callback_payload(order.invoice.external_invoice_id, "completed"))

    notice = notifier.notify_payment_received.await_args.args[0]
    assert notice.customer == "Alice Doe"
    assert [(i.product_name, i.quantity) for i in notice.items] == [("Course", 1), ("Stickers", 2)]
    assert notice.items[0].download_link == "https://files.test/course"
