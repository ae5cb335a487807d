"""
Mock Notification Service Implementation.

This simulates notifications for testing and local development.
"""
import logging

from core.application.interfaces import INotificationService, PaymentNotice


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService):
    """
    Mock implementation of notification service.

    Logs notifications instead of actually sending them.
    Useful for testing and demos.
    """

    def __init__(self):
        """Initialize mock notification service."""
        self.notifications_sent = []
        logger.info("MockNotificationService initialized (console logging)")

    async def notify_payment_received(self, notice: PaymentNotice) -> None:
        """
        Record a payment notification.

        Args:
            notice: Paid order summary
        """
        notification = {
            "type": "payment_received",
            "order_id": notice.order_id,
            "user_id": notice.user_id,
            "telegram_id": notice.telegram_id,
            "amount": notice.amount,
            "items": [item.product_name for item in notice.items],
        }

        self.notifications_sent.append(notification)

        logger.info(
            f"✅ 🔔 PAYMENT NOTIFICATION:\n"
            f"   Order: {notice.order_id}\n"
            f"   Customer: {notice.customer} ({notice.telegram_id})\n"
            f"   Amount: ${notice.amount}\n"
            f"   Items: {len(notice.items)}"
        )

    def get_notifications(self) -> list:
        """Get all sent notifications (for testing)."""
        return self.notifications_sent

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        notification = {
            "type": "generic",
            "message": message,
            "severity": severity,
        }

        self.notifications_sent.append(notification)

        severity_emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.info(
            f"{severity_emoji} 🔔 NOTIFICATION (severity={severity}):\n"
            f"   {message}"
        )

    def clear(self) -> None:
        """Clear notifications (for testing)."""
        self.notifications_sent.clear()
        logger.info("🗑️ Notifications cleared")
