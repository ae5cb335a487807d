"""
Crypto Store - Main FastAPI Application.

REST API for the storefront commerce core: catalog, orders, crypto
invoices and payment reconciliation.
"""
from typing import Dict, Type
import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.domain.exceptions import (
    AdminAccessDeniedError,
    GatewayError,
    InsufficientStockError,
    InvoiceNotFoundError,
    OrderNotFoundError,
    OrderNotPayableError,
    StoreError,
    UserNotFoundError,
    ValidationError,
    WebhookAuthenticationError,
)
from core.infrastructure.database.config import init_database
from core.infrastructure.logging import configure_logging

from apps.api.deps import get_engine, get_settings, reset_dependencies
from apps.api.v1.endpoints import admin, health, orders, products, users, webhooks


logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Crypto Store API",
    description="""
    Digital goods storefront paid in cryptocurrency.

    Features:
    - Product catalog with atomic stock reservation
    - Orders with price snapshots
    - Plisio crypto invoices
    - Idempotent, signature-checked payment webhooks
    - Purchase grants and Telegram notifications
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

# Most specific class wins (looked up along the exception's MRO)
ERROR_STATUS: Dict[Type[StoreError], int] = {
    ValidationError: 400,
    UserNotFoundError: 404,
    InsufficientStockError: 409,
    OrderNotFoundError: 404,
    OrderNotPayableError: 409,
    InvoiceNotFoundError: 404,
    WebhookAuthenticationError: 401,
    AdminAccessDeniedError: 403,
    GatewayError: 502,
}


def status_for(exc: StoreError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Translate domain errors to structured JSON responses."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are validation errors like any other."""
    return JSONResponse(
        status_code=400,
        content={
            "error": ValidationError.code,
            "detail": "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    settings = get_settings()
    configure_logging(settings.store.log_level)
    logger.info("🚀 Crypto Store API starting up...")

    await init_database(get_engine())
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("👋 Crypto Store API shutting down...")
    await reset_dependencies()


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(health.router, tags=["Health"])
app.include_router(products.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(orders.router, prefix="/api/v1")
app.include_router(webhooks.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
