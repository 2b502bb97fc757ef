"""Admin API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_admin_user
from awards.models.user import User
from awards.schemas.admin import AuditLogEntry, AuditLogResponse, DashboardStatsResponse
from awards.services import AuditService, StatisticsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """Headline counts for the admin dashboard."""
    stats = await StatisticsService(db).get_dashboard_stats()
    return DashboardStatsResponse(**stats)


@router.get("/audit-log", response_model=AuditLogResponse)
async def get_audit_log(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    limit: int = Query(default=100, ge=1, le=500),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """Most recent audit entries, newest first, optionally for one user."""
    entries = await AuditService(db).list_entries(user_id=user_id, limit=limit)
    return AuditLogResponse(entries=[AuditLogEntry.model_validate(entry) for entry in entries])
