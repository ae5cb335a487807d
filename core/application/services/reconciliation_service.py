"""
Webhook reconciler.

Turns authenticated gateway callbacks into invoice/order state changes.
Each callback is reconciled in a single transaction; the payment
notification is sent only after that transaction commits.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import (
    INotificationService,
    IPaymentGateway,
    NoticeItem,
    PaymentNotice,
)
from core.data.uow import UnitOfWork, create_uow
from core.domain.enums import InvoiceStatus
from core.domain.exceptions import InvoiceNotFoundError, WebhookAuthenticationError
from core.domain.services import apply_status

from .fulfillment_service import FulfillmentRecorder

logger = logging.getLogger(__name__)

SIGNATURE_FIELD = "verify_hash"


class ReconciliationOutcome(str, Enum):
    PAID = "paid"
    UPDATED = "updated"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ReconciliationResult:
    outcome: ReconciliationOutcome
    external_invoice_id: str
    invoice_status: Optional[InvoiceStatus] = None
    order_id: Optional[int] = None


class WebhookReconciler:
    """
    Idempotent reconciliation of gateway callbacks.

    Flow:
    1. Authenticate the payload signature
    2. Resolve the invoice by external id
    3. Map the gateway status and compute the forward transition
    4. Apply it with a conditional update
    5. On the first move into ``completed``: mark the order paid and
       grant every item, in the same transaction
    6. After commit, notify
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        notifier: INotificationService,
        fulfillment: Optional[FulfillmentRecorder] = None,
    ) -> None:
        self._session_factory = session_factory
        self._gateway = gateway
        self._notifier = notifier
        self._fulfillment = fulfillment or FulfillmentRecorder()

    async def reconcile(
        self,
        payload: Mapping[str, Any],
        signature: Optional[str] = None,
    ) -> ReconciliationResult:
        """Reconcile one callback.

        Args:
            payload: Callback fields as received
            signature: Signature header; the payload's ``verify_hash`` is used when absent

        Returns:
            ReconciliationResult describing what happened

        Raises:
            WebhookAuthenticationError: Signature missing or invalid
            ValidationError: Payload without invoice id
            InvoiceNotFoundError: Invoice was never issued by us
        """
        signature = signature or payload.get(SIGNATURE_FIELD)
        if not self._gateway.verify_notification(payload, signature):
            logger.error(
                f"❌ Webhook signature verification failed "
                f"(txn_id={payload.get('txn_id')}, status={payload.get('status')})"
            )
            raise WebhookAuthenticationError()

        notification = self._gateway.parse_notification(payload)
        external_id = notification.external_invoice_id
        notice: Optional[PaymentNotice] = None

        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id

            invoice = await uow.invoices.find_by_external_id(external_id)
            if invoice is None:
                logger.warning(f"[{execution_id}] Webhook for unknown invoice {external_id} discarded")
                raise InvoiceNotFoundError(external_id)

            if notification.status is None:
                logger.info(
                    f"[{execution_id}] Unrecognised gateway status '{notification.raw_status}' "
                    f"for invoice {external_id}, ignored"
                )
                return ReconciliationResult(
                    ReconciliationOutcome.IGNORED, external_id, invoice.status, invoice.order_id
                )

            transition = apply_status(invoice.status, notification.status)
            if not transition.changed:
                logger.info(
                    f"[{execution_id}] Invoice {external_id} already {invoice.status.value}, "
                    f"'{notification.raw_status}' is a no-op"
                )
                return ReconciliationResult(
                    ReconciliationOutcome.DUPLICATE, external_id, invoice.status, invoice.order_id
                )

            paid_at = datetime.now(timezone.utc) if transition.newly_paid else None
            applied = await uow.invoices.transition(invoice.id, transition.status, paid_at)
            if not applied:
                # A concurrent delivery moved the row first
                current = await uow.invoices.find_by_external_id(external_id)
                logger.info(f"[{execution_id}] Invoice {external_id} updated concurrently, no-op")
                return ReconciliationResult(
                    ReconciliationOutcome.DUPLICATE, external_id, current.status, invoice.order_id
                )

            if transition.newly_paid:
                notice = await self._settle(uow, invoice.order_id)
            outcome = ReconciliationOutcome.PAID if notice else ReconciliationOutcome.UPDATED

            await uow.commit()
            logger.info(
                f"[{execution_id}] ✅ Invoice {external_id}: "
                f"{transition.previous.value} → {transition.status.value} (order {invoice.order_id})"
            )

        if notice is not None:
            await self._dispatch(notice)

        return ReconciliationResult(outcome, external_id, transition.status, invoice.order_id)

    async def _settle(self, uow: UnitOfWork, order_id: int) -> Optional[PaymentNotice]:
        """Mark the order paid, grant its products and build the notice."""
        order = await uow.orders.find_by_id(order_id)
        if order is None:
            logger.error(f"[{uow.execution_id}] Paid invoice references missing order {order_id}")
            return None

        if not await uow.orders.mark_paid(order_id):
            logger.warning(
                f"[{uow.execution_id}] Order {order_id} is {order.status.value}, "
                f"not pending; payment recorded without fulfillment"
            )
            return None

        await self._fulfillment.fulfill(uow, order)

        user = await uow.users.find_by_id(order.user_id)
        items = []
        for item in order.items:
            product = await uow.products.find_by_id(item.product_id, include_inactive=True)
            items.append(
                NoticeItem(
                    product_name=item.product_name or (product.name if product else f"#{item.product_id}"),
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    download_link=product.download_link if product else None,
                )
            )

        return PaymentNotice(
            order_id=order.id,
            user_id=order.user_id,
            telegram_id=user.telegram_id,
            customer=user.display_name,
            amount=order.total_price.amount,
            currency=order.total_price.currency,
            items=items,
        )

    async def _dispatch(self, notice: PaymentNotice) -> None:
        try:
            await self._notifier.notify_payment_received(notice)
        except Exception as e:
            logger.error(f"❌ Payment notification for order {notice.order_id} failed: {e}", exc_info=True)
