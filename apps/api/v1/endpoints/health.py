"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker

from apps.api.deps import get_session_factory


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns process liveness only.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "crypto-store",
    }


@router.get("/health/ready")
async def readiness_check(session_factory: async_sessionmaker = Depends(get_session_factory)):
    """
    Readiness check endpoint.

    Returns 503 while the database cannot be reached.
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"❌ Readiness check failed: {e}")
        database = "unavailable"

    ready = database == "ok"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"api": "ok", "database": database},
        },
    )
