"""Unit of Work pattern for atomic transactions."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.value_objects import ExecutionID

from .repositories import (
    SqlAlchemyGrantRepository,
    SqlAlchemyInventoryLedger,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyUserRepository,
)

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories

    Nothing is committed unless ``commit()`` is called explicitly; leaving
    the context without committing (or with an exception) rolls back.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None

        # Lazy-loaded repositories
        self._products: Optional[SqlAlchemyProductRepository] = None
        self._inventory: Optional[SqlAlchemyInventoryLedger] = None
        self._users: Optional[SqlAlchemyUserRepository] = None
        self._orders: Optional[SqlAlchemyOrderRepository] = None
        self._invoices: Optional[SqlAlchemyInvoiceRepository] = None
        self._grants: Optional[SqlAlchemyGrantRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback anything uncommitted and release the session."""
        try:
            if exc_type is not None:
                logger.debug(f"[{self._execution_id}] Rolling back after {exc_type.__name__}")
            await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def products(self) -> SqlAlchemyProductRepository:
        if self._products is None:
            self._products = SqlAlchemyProductRepository(self._require_session())
        return self._products

    @property
    def inventory(self) -> SqlAlchemyInventoryLedger:
        if self._inventory is None:
            self._inventory = SqlAlchemyInventoryLedger(self._require_session())
        return self._inventory

    @property
    def users(self) -> SqlAlchemyUserRepository:
        if self._users is None:
            self._users = SqlAlchemyUserRepository(self._require_session())
        return self._users

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._orders is None:
            self._orders = SqlAlchemyOrderRepository(self._require_session())
        return self._orders

    @property
    def invoices(self) -> SqlAlchemyInvoiceRepository:
        if self._invoices is None:
            self._invoices = SqlAlchemyInvoiceRepository(self._require_session())
        return self._invoices

    @property
    def grants(self) -> SqlAlchemyGrantRepository:
        if self._grants is None:
            self._grants = SqlAlchemyGrantRepository(self._require_session())
        return self._grants

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self._require_session().commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self._require_session().rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
