"""Nominations API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_admin_user, get_current_user, get_verified_user
from awards.models.base import AuditAction
from awards.models.nomination import Nomination
from awards.models.user import User
from awards.routers.common import http_error, record_audit
from awards.schemas.nomination import NominationCreateRequest, NominationResponse, NominationReviewRequest
from awards.services import NominationService
from awards.utils.exceptions import (
    CategoryNotFoundError,
    InvalidReviewStatusError,
    NominationAlreadyReviewedError,
    NominationNotFoundError,
    ReasonTooShortError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(
    nomination: Nomination,
    *,
    include_contact: bool,
    category_name: Optional[str] = None,
    submitted_by_name: Optional[str] = None,
    submitted_by_email: Optional[str] = None,
) -> NominationResponse:
    return NominationResponse(
        nomination_id=nomination.nomination_id,
        category_id=nomination.category_id,
        category_name=category_name,
        nominee_name=nomination.nominee_name,
        nominee_email=nomination.nominee_email if include_contact else None,
        organization=nomination.organization,
        reason=nomination.reason,
        status=nomination.status,
        submitted_by_id=nomination.submitted_by_id,
        submitted_by_name=submitted_by_name,
        submitted_by_email=submitted_by_email,
        reviewed_by_id=nomination.reviewed_by_id,
        reviewed_at=nomination.reviewed_at,
        created_at=nomination.created_at,
    )


@router.post("", response_model=NominationResponse, status_code=201)
async def submit_nomination(
    request_body: NominationCreateRequest,
    request: Request,
    user: User = Depends(get_verified_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        nomination = await NominationService(db).submit_nomination(
            user,
            category_id=request_body.category_id,
            nominee_name=request_body.nominee_name,
            nominee_email=request_body.nominee_email,
            reason=request_body.reason,
            organization=request_body.organization,
        )
    except ReasonTooShortError as e:
        raise http_error(400, e)
    except CategoryNotFoundError as e:
        raise http_error(404, e)

    response = _to_response(nomination, include_contact=True, submitted_by_name=user.display_name)
    await record_audit(
        db,
        request,
        AuditAction.NOMINATION_SUBMITTED,
        user_id=user.user_id,
        details={"nomination_id": nomination.nomination_id, "category_id": nomination.category_id},
    )
    return response


@router.get("", response_model=list[NominationResponse])
async def list_nominations(
    status: Optional[str] = Query(default=None),
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Approved nominations for everyone; admins see all and may filter by status."""
    listings = await NominationService(db).list_nominations(user, status=status, category_id=category_id)
    return [
        _to_response(
            listing["nomination"],
            include_contact=user.is_admin,
            category_name=listing["category_name"],
            submitted_by_name=listing["submitted_by_name"],
            submitted_by_email=listing["submitted_by_email"],
        )
        for listing in listings
    ]


@router.patch("/{nomination_id}/review", response_model=NominationResponse)
async def review_nomination(
    nomination_id: int,
    request_body: NominationReviewRequest,
    request: Request,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        nomination = await NominationService(db).review_nomination(admin, nomination_id, request_body.status)
    except InvalidReviewStatusError as e:
        raise http_error(400, e)
    except NominationNotFoundError as e:
        raise http_error(404, e)
    except NominationAlreadyReviewedError as e:
        raise http_error(409, e)

    response = _to_response(nomination, include_contact=True)
    await record_audit(
        db,
        request,
        AuditAction.NOMINATION_REVIEWED,
        user_id=admin.user_id,
        details={"nomination_id": nomination_id, "status": nomination.status},
    )
    return response
