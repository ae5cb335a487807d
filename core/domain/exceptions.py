"""
Domain exceptions.

Every error the commerce core reports to its callers derives from StoreError
and carries a machine-readable ``code`` that the API layer exposes verbatim.
"""
from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base class for all commerce core errors."""

    code = "StoreError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for API responses."""
        return {"error": self.code, "detail": self.message}


# =============================================================================
# VALIDATION ERRORS (bad input, never partially persisted)
# =============================================================================

class ValidationError(StoreError):
    """Request input is invalid."""

    code = "ValidationError"


class ProductNotFoundError(ValidationError):
    """Product does not exist or is inactive."""

    code = "ProductNotFound"

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["product_id"] = self.product_id
        return data


class UserNotFoundError(ValidationError):
    """No user registered under the given Telegram id."""

    code = "UserNotFound"

    def __init__(self, telegram_id: int):
        super().__init__(f"User {telegram_id} not found")
        self.telegram_id = telegram_id


# =============================================================================
# RESOURCE CONTENTION
# =============================================================================

class InsufficientStockError(StoreError):
    """Not enough units left to reserve. An expected outcome, not a fault."""

    code = "InsufficientStock"

    def __init__(self, product_id: int, requested: int, available: Optional[int] = None):
        message = f"Insufficient stock for product {product_id}: requested {requested}"
        if available is not None:
            message += f", only {available} left"
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            product_id=self.product_id,
            requested=self.requested,
            available=self.available,
        )
        return data


# =============================================================================
# LOOKUPS / STATE
# =============================================================================

class OrderNotFoundError(StoreError):
    code = "OrderNotFound"

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class OrderNotPayableError(StoreError):
    """An invoice was requested for an order that is no longer pending."""

    code = "OrderNotPayable"

    def __init__(self, order_id: int, status: str):
        super().__init__(f"Order {order_id} is {status}, invoices can only be issued for pending orders")
        self.order_id = order_id
        self.status = status


class InvoiceNotFoundError(StoreError):
    """Webhook referenced an external invoice id we never issued."""

    code = "InvoiceNotFound"

    def __init__(self, external_invoice_id: str):
        super().__init__(f"Invoice {external_invoice_id} not found")
        self.external_invoice_id = external_invoice_id


# =============================================================================
# SECURITY
# =============================================================================

class WebhookAuthenticationError(StoreError):
    """Webhook signature missing or does not match the payload."""

    code = "InvalidSignature"

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message)


class AdminAccessDeniedError(StoreError):
    code = "AdminAccessRequired"

    def __init__(self):
        super().__init__("Admin access required")


# =============================================================================
# INTEGRATION
# =============================================================================

class GatewayError(StoreError):
    """
    Payment gateway unreachable, slow, or refused the request.

    Transient and retryable by the caller. ``order_id`` is attached by the
    provisioning service so callers can retry invoice creation for an order
    that is already committed.
    """

    code = "GatewayError"

    def __init__(self, message: str, order_id: Optional[int] = None):
        super().__init__(message)
        self.order_id = order_id

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.order_id is not None:
            data["order_id"] = self.order_id
        return data

