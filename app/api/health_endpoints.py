"""
Health check endpoints.

- GET /: liveness and version
- GET /health: database connectivity plus error counters
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime
import logging

from app.config.settings import settings
from app.core.db import get_db
from app.core.error_handlers import error_handler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    """Root endpoint for basic health check."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running"
    }


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check with database status and error statistics."""
    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "healthy", "connection": "ok"}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy" if database["status"] == "healthy" else "unhealthy",
        "version": settings.app_version,
        "timestamp": datetime.utcnow().isoformat(),
        "details": {"database": database},
        "error_statistics": error_handler.get_error_statistics(),
    }
