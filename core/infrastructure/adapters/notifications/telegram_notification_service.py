"""
Telegram Notification Service Implementation.

Sends payment confirmations to buyers and alerts to admins via the
Telegram Bot API.
"""
from typing import Iterable
import logging
import aiohttp

from core.application.interfaces import INotificationService, PaymentNotice
from core.domain.value_objects import AdminAllowList
from core.settings.sections.integrations import TelegramSettings


logger = logging.getLogger(__name__)


def format_user_message(notice: PaymentNotice) -> str:
    """Confirmation sent to the buyer."""
    lines = [
        "🎉 *Payment Received!*",
        "",
        f"Your payment for Order #{notice.order_id} has been confirmed!",
        "",
        "*Order Details:*",
        f"💰 Amount: ${notice.amount}",
        f"📦 Items: {_item_names(notice)}",
    ]
    links = [item for item in notice.items if item.download_link]
    if links:
        lines.append("")
        lines.append("*Downloads:*")
        lines.extend(f"• {item.product_name}: {item.download_link}" for item in links)
    lines.append("")
    lines.append("Thank you for your purchase! 🙏")
    return "\n".join(lines)


def format_admin_message(notice: PaymentNotice) -> str:
    """Alert sent to every admin."""
    return (
        f"💰 *New Payment Received*\n\n"
        f"Order #{notice.order_id}\n"
        f"Customer: {notice.customer}\n"
        f"Amount: ${notice.amount}\n"
        f"Items: {_item_names(notice)}"
    )


def _item_names(notice: PaymentNotice) -> str:
    if not notice.items:
        return "-"
    return ", ".join(
        item.product_name if item.quantity == 1 else f"{item.product_name} x{item.quantity}"
        for item in notice.items
    )


class TelegramNotificationService(INotificationService):
    """
    Telegram implementation of notification service.

    Delivery failures are logged and never raised.
    """

    def __init__(self, settings: TelegramSettings, admins: AdminAllowList):
        """
        Initialize Telegram notification service.

        Args:
            settings: Telegram settings with bot token
            admins: Telegram ids that receive admin alerts
        """
        self.settings = settings
        self.bot_token = settings.token
        self.admins = admins
        self.api_url = f"{settings.api_url.rstrip('/')}/bot{self.bot_token}/sendMessage"
        logger.info("TelegramNotificationService initialized")

    async def notify_payment_received(self, notice: PaymentNotice) -> None:
        """Send the buyer confirmation, then alert each admin."""
        await self._send_message(notice.telegram_id, format_user_message(notice))
        await self._broadcast(self.admins, format_admin_message(notice))

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message to the admins.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        await self._broadcast(self.admins, f"{emoji} {message}")

    async def _broadcast(self, chat_ids: Iterable[int], text: str) -> None:
        for chat_id in chat_ids:
            await self._send_message(chat_id, text)

    async def _send_message(self, chat_id: int, text: str) -> bool:
        """
        Send message to Telegram.

        Args:
            chat_id: Recipient chat id
            text: Message text (supports Markdown)

        Returns:
            True if Telegram accepted the message
        """
        if not self.bot_token:
            logger.warning("Telegram bot_token not configured, skipping notification")
            return False

        try:
            async with aiohttp.ClientSession() as session:
                payload = {
                    "chat_id": chat_id,
                    "text": text,
                    "parse_mode": "Markdown",
                }

                async with session.post(self.api_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            f"Telegram API error for chat {chat_id}: {response.status} - {error_text}"
                        )
                        return False
                    logger.info(f"Telegram notification sent to {chat_id}")
                    return True
        except Exception as e:
            logger.error(f"Failed to send Telegram notification to {chat_id}: {e}", exc_info=True)
            return False
