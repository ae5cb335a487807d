"""
Plisio API client.

Provisions invoices through the Plisio REST API and authenticates its
callbacks.
"""
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional
import asyncio
import logging

import aiohttp

from core.application.interfaces import GatewayNotification, IPaymentGateway
from core.domain.entities import Invoice, Order
from core.domain.exceptions import GatewayError
from core.settings.sections.plisio import PlisioSettings

from .mapper import PlisioMapper
from .signature import verify_signature


logger = logging.getLogger(__name__)


class PlisioClient(IPaymentGateway):
    """
    Plisio implementation of the payment gateway.

    Calls are made once; failures surface as GatewayError and are never
    retried here.
    """

    def __init__(
        self,
        settings: PlisioSettings,
        callback_url: str,
        success_url: Optional[str] = None,
        fail_url: Optional[str] = None,
    ):
        """
        Initialize Plisio client.

        Args:
            settings: Plisio settings with secret key and API URL
            callback_url: Public URL of the payment webhook
            success_url: Where the buyer lands after paying
            fail_url: Where the buyer lands after a failed payment
        """
        self.settings = settings
        self.api_url = settings.api_url.rstrip("/")
        self.callback_url = callback_url
        self.success_url = success_url
        self.fail_url = fail_url
        self.invoice_ttl = timedelta(hours=settings.invoice_ttl_hours)
        logger.info("PlisioClient initialized")

    async def create_invoice(self, order: Order, currency: str) -> Invoice:
        """Provision an invoice for the order's USD total.

        Args:
            order: Persisted pending order
            currency: Crypto currency code, e.g. BTC

        Returns:
            Unsaved Invoice in status ``new``

        Raises:
            GatewayError: On timeouts, HTTP failures or gateway-reported errors
        """
        params = {
            "api_key": self.settings.secret_key,
            "currency": currency,
            "source_currency": order.total_price.currency,
            "source_amount": str(order.total_price.amount),
            "order_number": str(order.id),
            "order_name": f"Order #{order.id}",
            "callback_url": self.callback_url,
            "success_invoice_url": self.success_url,
            "fail_invoice_url": self.fail_url,
        }
        # Remove unset values
        params = {key: value for key, value in params.items() if value is not None}

        logger.info(
            f"🔄 Creating Plisio invoice: order={order.id} "
            f"amount={order.total_price} currency={currency}"
        )

        try:
            body = await self._request("invoices/new", params)
        except asyncio.TimeoutError as e:
            logger.error(f"❌ Plisio request timed out for order {order.id}")
            raise GatewayError("Payment gateway timed out", order_id=order.id) from e
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"❌ Plisio request failed for order {order.id}: {e}")
            raise GatewayError(f"Payment gateway request failed: {e}", order_id=order.id) from e

        if not isinstance(body, dict) or body.get("status") != "success":
            data = body.get("data") if isinstance(body, dict) else None
            message = (data or {}).get("message") if isinstance(data, dict) else None
            logger.error(f"❌ Plisio API error for order {order.id}: {message or body}")
            raise GatewayError(
                f"Plisio API error: {message or 'Unknown error'}",
                order_id=order.id,
            )

        invoice = PlisioMapper.to_invoice(body.get("data") or {}, order, currency, self.invoice_ttl)
        logger.info(f"✅ Plisio invoice created: {invoice.external_invoice_id} for order {order.id}")
        return invoice

    def verify_notification(self, payload: Mapping[str, Any], signature: Optional[str]) -> bool:
        return verify_signature(payload, signature, self.settings.secret_key)

    def parse_notification(self, payload: Mapping[str, Any]) -> GatewayNotification:
        return PlisioMapper.to_notification(payload)

    async def _request(self, path: str, params: Dict[str, str]) -> Any:
        """
        GET an API endpoint and decode the JSON body.

        Plisio reports errors as JSON with ``status: error`` and a non-2xx
        code, so the body is decoded regardless of the HTTP status.

        Raises:
            aiohttp.ClientError: On connection failures
            asyncio.TimeoutError: When the configured timeout elapses
            ValueError: If the body is not JSON
        """
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(f"{self.api_url}/{path}", params=params) as response:
                if response.status >= 500:
                    text = await response.text()
                    raise aiohttp.ClientResponseError(
                        response.request_info,
                        response.history,
                        status=response.status,
                        message=text[:200],
                    )
                return await response.json(content_type=None)
