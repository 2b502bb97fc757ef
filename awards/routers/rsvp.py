"""RSVP API router."""
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_admin_user, get_verified_user
from awards.models.base import AuditAction
from awards.models.user import User
from awards.routers.common import http_error, record_audit
from awards.schemas.rsvp import MyRSVPResponse, RSVPRequest, RSVPResponse, RSVPStatsResponse
from awards.services import RSVPService
from awards.utils.exceptions import InvalidGuestCountError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=RSVPResponse)
async def submit_rsvp(
    request_body: RSVPRequest,
    request: Request,
    user: User = Depends(get_verified_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the caller's RSVP."""
    try:
        rsvp = await RSVPService(db).upsert_rsvp(user.user_id, request_body.attending, request_body.guest_count)
    except InvalidGuestCountError as e:
        raise http_error(400, e)

    response = RSVPResponse.model_validate(rsvp)
    await record_audit(
        db,
        request,
        AuditAction.RSVP_SUBMITTED,
        user_id=user.user_id,
        details={"attending": response.attending, "guest_count": response.guest_count},
    )
    return response


@router.get("/me", response_model=MyRSVPResponse)
async def get_my_rsvp(
    user: User = Depends(get_verified_user),
    db: AsyncSession = Depends(get_db),
):
    rsvp = await RSVPService(db).get_rsvp(user.user_id)
    return MyRSVPResponse(rsvp=RSVPResponse.model_validate(rsvp) if rsvp else None)


@router.get("/stats", response_model=RSVPStatsResponse)
async def get_rsvp_stats(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    return RSVPStatsResponse(**await RSVPService(db).get_rsvp_stats())
