"""Plisio API JSON to domain mapper."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from core.application.interfaces import GatewayNotification
from core.domain.entities import Invoice, Order
from core.domain.enums import InvoiceStatus
from core.domain.exceptions import GatewayError, ValidationError


# Plisio invoice statuses -> internal invoice statuses
_STATUS_MAP: Dict[str, InvoiceStatus] = {
    "new": InvoiceStatus.NEW,
    "pending": InvoiceStatus.PENDING,
    "pending internal": InvoiceStatus.PENDING,
    "completed": InvoiceStatus.COMPLETED,
    "mismatch": InvoiceStatus.PENDING,
    "expired": InvoiceStatus.EXPIRED,
    "cancelled": InvoiceStatus.CANCELLED,
    "cancelled duplicate": InvoiceStatus.CANCELLED,
    "error": InvoiceStatus.CANCELLED,
}


class PlisioMapper:
    """Mapper for converting Plisio JSON to domain objects."""

    @staticmethod
    def map_status(raw_status: Optional[str]) -> Optional[InvoiceStatus]:
        """
        Map a gateway status string.

        Returns:
            Internal status, or None for statuses we do not track
        """
        if not raw_status:
            return None
        return _STATUS_MAP.get(str(raw_status).strip().lower())

    @staticmethod
    def to_notification(payload: Mapping[str, Any]) -> GatewayNotification:
        """Convert a callback payload.

        Args:
            payload: Callback fields (JSON or form decoded)

        Returns:
            GatewayNotification

        Raises:
            ValidationError: If the payload has no invoice id
        """
        external_id = payload.get("txn_id") or payload.get("external_invoice_id")
        if not external_id:
            raise ValidationError("Webhook payload must contain 'txn_id'")

        raw_status = str(payload.get("status") or "")
        return GatewayNotification(
            external_invoice_id=str(external_id),
            raw_status=raw_status,
            status=PlisioMapper.map_status(raw_status),
            amount=_optional_str(payload.get("amount")),
            currency=_optional_str(payload.get("currency")),
        )

    @staticmethod
    def to_invoice(
        data: Mapping[str, Any],
        order: Order,
        currency: str,
        ttl: timedelta,
        now: Optional[datetime] = None,
    ) -> Invoice:
        """Convert the ``data`` object of an ``invoices/new`` response.

        Args:
            data: Response ``data`` object
            order: Order the invoice was requested for
            currency: Requested crypto currency (used if the gateway omits it)
            ttl: Lifetime applied when the gateway returns no expiry
            now: Reference time, defaults to the current UTC time

        Returns:
            Unsaved Invoice in status ``new``

        Raises:
            GatewayError: If the response has no transaction id
        """
        txn_id = data.get("txn_id")
        if not txn_id:
            raise GatewayError("Plisio response is missing 'txn_id'", order_id=order.id)

        now = now or datetime.now(timezone.utc)
        expires_at = _parse_expiry(data.get("expire_utc")) or now + ttl

        return Invoice(
            order_id=order.id,
            external_invoice_id=str(txn_id),
            currency=str(data.get("currency") or currency),
            amount_usd=order.total_price,
            crypto_amount=_parse_decimal(data.get("amount")),
            status=InvoiceStatus.NEW,
            invoice_url=data.get("invoice_url"),
            qr_code_url=data.get("qr_code"),
            wallet_hash=data.get("wallet_hash"),
            expires_at=expires_at,
        )


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def _parse_expiry(value: Any) -> Optional[datetime]:
    """expire_utc is a unix timestamp; ISO strings are accepted as well."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) or str(value).isdigit():
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
