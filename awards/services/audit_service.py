"""Service for recording audit log entries.

Audit writes are best effort: they run after the primary operation has
committed and any failure is logged and swallowed so it can never undo or
fail the operation being audited.
"""
from __future__ import annotations

import logging
from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from awards.models.audit_log import AuditLog
from awards.models.base import AuditAction

logger = logging.getLogger(__name__)


class AuditService:
    """Business logic for the audit trail."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        action: AuditAction | str,
        *,
        user_id: Optional[int] = None,
        details: Optional[dict] = None,
        ip_address: Optional[str] = None,
    ) -> Optional[AuditLog]:
        """Persist an audit entry, returning None if it could not be written."""
        action_value = action.value if isinstance(action, AuditAction) else str(action)
        try:
            entry = AuditLog(
                user_id=user_id,
                action=action_value,
                details=details or {},
                ip_address=ip_address,
                created_at=datetime.now(UTC),
            )
            self.db.add(entry)
            await self.db.commit()
        except Exception as e:
            logger.error(f"Failed to record audit entry {action_value} for user {user_id}: {e}", exc_info=True)
            try:
                await self.db.rollback()
            except Exception as rollback_error:
                logger.error(f"Rollback after audit failure also failed: {rollback_error}")
            return None
        return entry

    async def list_entries(self, *, user_id: Optional[int] = None, limit: int = 100) -> list[AuditLog]:
        """Load the most recent audit entries, newest first."""
        stmt = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.audit_id.desc()).limit(limit)
        if user_id is not None:
            stmt = stmt.where(AuditLog.user_id == user_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
