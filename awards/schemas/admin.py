"""Admin dashboard schemas."""
from datetime import datetime
from typing import Any, Optional

from awards.schemas.base import BaseSchema


class DashboardStatsResponse(BaseSchema):
    total_nominations: int
    pending_nominations: int
    approved_nominations: int
    total_votes: int
    total_categories: int
    total_users: int


class AuditLogEntry(BaseSchema):
    audit_id: int
    user_id: Optional[int] = None
    action: str
    details: dict[str, Any]
    ip_address: Optional[str] = None
    created_at: datetime


class AuditLogResponse(BaseSchema):
    entries: list[AuditLogEntry]
