"""Application services."""
from .catalog_service import ProductCatalogService
from .fulfillment_service import FulfillmentRecorder, FulfillmentResult, GrantOutcome
from .order_service import OrderApplicationService
from .reconciliation_service import ReconciliationOutcome, ReconciliationResult, WebhookReconciler
from .reporting_service import ReportingService
from .user_service import UserService

__all__ = [
    "FulfillmentRecorder",
    "FulfillmentResult",
    "GrantOutcome",
    "OrderApplicationService",
    "ProductCatalogService",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "ReportingService",
    "UserService",
    "WebhookReconciler",
]
