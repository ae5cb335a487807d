"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from core.domain.entities import Invoice, Order
from core.domain.enums import InvoiceStatus


# =============================================================================
# NOTIFICATIONS
# =============================================================================

@dataclass(frozen=True)
class NoticeItem:
    product_name: str
    quantity: int
    unit_price: Decimal
    download_link: Optional[str] = None


@dataclass(frozen=True)
class PaymentNotice:
    """What the notification dispatcher learns about a freshly paid order."""
    order_id: int
    user_id: int
    telegram_id: int
    customer: str
    amount: Decimal
    currency: str
    items: List[NoticeItem] = field(default_factory=list)


class INotificationService(ABC):
    """
    Interface for notification service operations.

    This interface defines the contract for sending notifications,
    allowing different implementations (Telegram, console mock, etc.)
    """

    @abstractmethod
    async def notify_payment_received(self, notice: PaymentNotice) -> None:
        """
        Inform the buyer and the admins that an order has been paid.

        Args:
            notice: Paid order summary
        """
        pass

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        # Default implementation - can be overridden
        pass


# =============================================================================
# PAYMENT GATEWAY
# =============================================================================

@dataclass(frozen=True)
class GatewayNotification:
    """
    A gateway callback reduced to what reconciliation needs.

    ``status`` is None when the gateway reported a status we do not track.
    """
    external_invoice_id: str
    raw_status: str
    status: Optional[InvoiceStatus]
    amount: Optional[str] = None
    currency: Optional[str] = None


class IPaymentGateway(ABC):
    """Interface for the crypto invoicing gateway."""

    @abstractmethod
    async def create_invoice(self, order: Order, currency: str) -> Invoice:
        """
        Provision an invoice for the order's USD total.

        Args:
            order: Persisted pending order
            currency: Crypto currency code the buyer pays in

        Returns:
            Unsaved Invoice in status ``new``

        Raises:
            GatewayError: On timeouts, HTTP failures or gateway-reported errors
        """
        pass

    @abstractmethod
    def verify_notification(self, payload: Mapping[str, Any], signature: Optional[str]) -> bool:
        """Check the callback signature against the payload."""
        pass

    @abstractmethod
    def parse_notification(self, payload: Mapping[str, Any]) -> GatewayNotification:
        """
        Extract invoice id and mapped status from a callback payload.

        Raises:
            ValidationError: If the payload carries no invoice id
        """
        pass


__all__ = [
    "GatewayNotification",
    "INotificationService",
    "IPaymentGateway",
    "NoticeItem",
    "PaymentNotice",
]
