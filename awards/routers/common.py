"""Helpers shared by the API routers."""
import logging
from typing import Optional

from fastapi import HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.dependencies import get_client_ip
from awards.models.base import AuditAction
from awards.services.audit_service import AuditService
from awards.utils.exceptions import AwardsError

logger = logging.getLogger(__name__)


def http_error(status_code: int, exc: AwardsError) -> HTTPException:
    """Build the HTTP error for a domain exception, keeping its code."""
    return HTTPException(status_code=status_code, detail={"error": exc.code, "message": exc.message})


async def record_audit(
    db: AsyncSession,
    request: Request,
    action: AuditAction,
    *,
    user_id: Optional[int] = None,
    details: Optional[dict] = None,
) -> None:
    await AuditService(db).record(action, user_id=user_id, details=details, ip_address=get_client_ip(request))
