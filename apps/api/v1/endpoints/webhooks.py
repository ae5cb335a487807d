"""Payment gateway callback endpoint."""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Header, Request

from core.application.dtos.webhook_dto import WebhookAckDTO
from core.application.services import WebhookReconciler
from core.domain.exceptions import ValidationError

from apps.api.deps import get_reconciler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhooks", tags=["webhooks"])


async def read_payload(request: Request) -> Dict[str, Any]:
    """Decode a JSON or form-urlencoded callback body into a flat dict."""
    body = await request.body()
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type or body.lstrip().startswith(b"{"):
        try:
            payload = json.loads(body or b"{}")
        except ValueError:
            raise ValidationError("Webhook body is not valid JSON")
        if not isinstance(payload, dict):
            raise ValidationError("Webhook body must be a JSON object")
        return payload

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError("Webhook body is not valid UTF-8")
    return dict(parse_qsl(text, keep_blank_values=True))


@router.post("/plisio", response_model=WebhookAckDTO)
async def plisio_webhook(
    request: Request,
    x_plisio_signature: Optional[str] = Header(default=None, alias="X-Plisio-Signature"),
    reconciler: WebhookReconciler = Depends(get_reconciler),
) -> WebhookAckDTO:
    """Reconcile a Plisio invoice callback.

    Returns 200 for processed callbacks, including duplicates and
    unrecognised statuses; 401 for a bad signature; 404 for an unknown
    invoice.
    """
    payload = await read_payload(request)
    logger.info(f"📥 Plisio webhook: txn_id={payload.get('txn_id')} status={payload.get('status')}")

    result = await reconciler.reconcile(payload, x_plisio_signature)

    return WebhookAckDTO(
        outcome=result.outcome.value,
        invoice_status=result.invoice_status.value if result.invoice_status else None,
        order_id=result.order_id,
    )
