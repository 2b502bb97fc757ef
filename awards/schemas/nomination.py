"""Nomination schemas."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import constr

from awards.schemas.base import BaseSchema
from awards.schemas.auth import EmailLike


class NominationCreateRequest(BaseSchema):
    """Payload for submitting a nomination.

    Reason length is checked by the service so the error carries its own code.
    """

    category_id: int
    nominee_name: constr(strip_whitespace=True, min_length=1, max_length=200)
    nominee_email: EmailLike
    organization: Optional[constr(max_length=200)] = None
    reason: constr(max_length=5000)


class NominationReviewRequest(BaseSchema):
    status: Literal["APPROVED", "REJECTED"]


class NominationResponse(BaseSchema):
    nomination_id: int
    category_id: int
    category_name: Optional[str] = None
    nominee_name: str
    nominee_email: Optional[str] = None
    organization: Optional[str] = None
    reason: str
    status: str
    submitted_by_id: int
    submitted_by_name: Optional[str] = None
    submitted_by_email: Optional[str] = None
    reviewed_by_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
