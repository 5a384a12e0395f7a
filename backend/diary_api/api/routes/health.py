"""
Liveness and readiness probes.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/api/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Report ready only when the database answers."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error("Readiness check failed: %s", type(e).__name__)
        return JSONResponse(
            status_code=503,
            content={
                "status": "error",
                "timestamp": _timestamp(),
                "message": "Database connection failed",
            },
        )

    return {"status": "ok", "timestamp": _timestamp()}
