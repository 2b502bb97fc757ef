"""Health check endpoints."""
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from awards.database import engine
from awards.config import get_settings
from awards.version import APP_VERSION
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "detail": "Database connection failed"},
        )

    return {
        "status": "ok",
        "database": "connected",
    }


@router.get("/status")
async def app_status():
    """Version and environment information for display on the frontend."""
    settings = get_settings()
    return {
        "version": APP_VERSION,
        "environment": settings.environment,
        "email_delivery": "api" if settings.email_api_key else "log",
    }
