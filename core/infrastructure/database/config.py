"""
Database configuration.

Manages database connection settings, engine creation and schema setup.
"""
from typing import Optional
import logging

from pydantic_settings import BaseSettings
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.

    Loaded from environment variables or .env file.
    """

    # Database URL (postgresql+asyncpg://... in production)
    database_url: str = "sqlite+aiosqlite:///./store.db"

    # Connection pool settings (ignored for SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Seconds a SQLite writer waits for the database lock
    sqlite_busy_timeout: int = 30

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = {
        "env_file": ".env",
        "env_prefix": "DB_",
        "extra": "ignore",  # Ignore extra fields from .env
    }


# =============================================================================
# ENGINE CREATION
# =============================================================================

def _install_sqlite_locking(engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction start with BEGIN IMMEDIATE.

    The driver's implicit BEGIN is disabled so writers take the database
    lock up front and queue behind each other, like row locks on PostgreSQL.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(
    database_url: Optional[str] = None,
    settings: Optional[DatabaseSettings] = None,
) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        database_url: Overrides the configured URL (used by tests)
        settings: Database settings, loaded from the environment if omitted

    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    url = make_url(database_url or settings.database_url)

    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(
            url,
            echo=settings.echo_sql,
            connect_args={"timeout": settings.sqlite_busy_timeout},
        )
        _install_sqlite_locking(engine)
        return engine

    return create_async_engine(
        url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
        pool_pre_ping=True,  # Test connections before using
    )


# =============================================================================
# SESSION FACTORY
# =============================================================================

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Build the session factory handed to every Unit of Work.

    Returns:
        Session factory for creating sessions
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(engine: AsyncEngine) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database initialized successfully")


async def close_database(engine: AsyncEngine) -> None:
    """Close database connections."""
    logger.info("Closing database connections...")
    await engine.dispose()
    logger.info("✅ Database connections closed")
