"""FastAPI dependencies for dependency injection."""

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.application.interfaces import INotificationService, IPaymentGateway
from core.application.services import (
    OrderApplicationService,
    ProductCatalogService,
    ReportingService,
    UserService,
    WebhookReconciler,
)
from core.domain.exceptions import AdminAccessDeniedError
from core.domain.value_objects import AdminAllowList
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.notifications.telegram_notification_service import (
    TelegramNotificationService,
)
from core.infrastructure.database.config import close_database, create_engine, create_session_factory
from core.infrastructure.payments.plisio import PlisioClient
from core.settings import AppSettings, get_app_settings

load_dotenv()

logger = logging.getLogger(__name__)


# =============================================================================
# INFRASTRUCTURE SINGLETONS (stateless collaborators only)
# =============================================================================

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
_payment_gateway: Optional[IPaymentGateway] = None
_notification_service: Optional[INotificationService] = None
_admin_allow_list: Optional[AdminAllowList] = None


def get_settings() -> AppSettings:
    return get_app_settings()


def get_engine() -> AsyncEngine:
    """Get or create the process-wide async engine."""
    global _engine
    if _engine is None:
        _engine = create_engine(settings=get_settings().database)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


def get_admin_allow_list() -> AdminAllowList:
    """Allow-list parsed once from ADMIN_TELEGRAM_IDS."""
    global _admin_allow_list
    if _admin_allow_list is None:
        _admin_allow_list = get_settings().store.admins
        logger.info(f"Admin allow-list loaded ({len(_admin_allow_list)} id(s))")
    return _admin_allow_list


def get_payment_gateway() -> IPaymentGateway:
    global _payment_gateway
    if _payment_gateway is None:
        settings = get_settings()
        _payment_gateway = PlisioClient(
            settings.plisio,
            callback_url=settings.store.webhook_url,
            success_url=settings.store.success_url,
            fail_url=settings.store.fail_url,
        )
    return _payment_gateway


def get_notification_service() -> INotificationService:
    """Telegram when enabled and configured, console mock otherwise."""
    global _notification_service
    if _notification_service is None:
        telegram = get_settings().telegram
        if telegram.enabled and telegram.token:
            _notification_service = TelegramNotificationService(telegram, get_admin_allow_list())
        else:
            logger.warning("Telegram notifications disabled, using MockNotificationService")
            _notification_service = MockNotificationService()
    return _notification_service


def get_default_currency() -> str:
    return get_settings().plisio.default_currency


async def reset_dependencies() -> None:
    """Dispose the engine and forget all singletons (shutdown)."""
    global _engine, _session_factory, _payment_gateway, _notification_service, _admin_allow_list
    if _engine is not None:
        await close_database(_engine)
    _engine = None
    _session_factory = None
    _payment_gateway = None
    _notification_service = None
    _admin_allow_list = None


# =============================================================================
# SERVICES
# =============================================================================

def get_order_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    default_currency: str = Depends(get_default_currency),
) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(session_factory, gateway, default_currency)


def get_catalog_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ProductCatalogService:
    return ProductCatalogService(session_factory)


def get_user_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> UserService:
    return UserService(session_factory)


def get_reporting_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ReportingService:
    return ReportingService(session_factory)


def get_reconciler(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    notifier: INotificationService = Depends(get_notification_service),
) -> WebhookReconciler:
    return WebhookReconciler(session_factory, gateway, notifier)


# =============================================================================
# AUTHORIZATION
# =============================================================================

async def require_admin(
    x_telegram_id: Optional[str] = Header(default=None, alias="X-Telegram-Id"),
    admins: AdminAllowList = Depends(get_admin_allow_list),
) -> int:
    """Allow the request only for Telegram ids on the admin allow-list.

    Returns:
        The caller's Telegram id
    """
    try:
        telegram_id = int(x_telegram_id) if x_telegram_id is not None else None
    except ValueError:
        telegram_id = None

    if not admins.is_admin(telegram_id):
        logger.warning(f"Admin access denied for X-Telegram-Id={x_telegram_id!r}")
        raise AdminAccessDeniedError()
    return telegram_id
