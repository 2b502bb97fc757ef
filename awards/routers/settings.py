"""Voting settings API router."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_admin_user
from awards.models.base import AuditAction
from awards.models.user import User
from awards.routers.common import http_error, record_audit
from awards.schemas.settings import VotingSettingsResponse, VotingSettingsUpdateRequest
from awards.services import SettingsService
from awards.utils.exceptions import InvalidVotingWindowError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=VotingSettingsResponse)
async def get_voting_settings(db: AsyncSession = Depends(get_db)):
    """Public view of the voting window."""
    settings_row = await SettingsService(db).get_voting_settings()
    return VotingSettingsResponse.model_validate(settings_row)


@router.put("", response_model=VotingSettingsResponse)
async def update_voting_settings(
    request_body: VotingSettingsUpdateRequest,
    request: Request,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    changes = request_body.to_changes()
    try:
        settings_row = await SettingsService(db).update_voting_settings(changes, updated_by=admin.user_id)
    except InvalidVotingWindowError as e:
        raise http_error(400, e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = VotingSettingsResponse.model_validate(settings_row)
    await record_audit(
        db,
        request,
        AuditAction.SETTINGS_UPDATED,
        user_id=admin.user_id,
        details={key: str(value) if value is not None else None for key, value in changes.items()},
    )
    return response


@router.post("/reveal-winners", response_model=VotingSettingsResponse)
async def reveal_winners(
    request: Request,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """Announce results so every signed-in user can see the winners."""
    settings_row = await SettingsService(db).reveal_winners(updated_by=admin.user_id)
    response = VotingSettingsResponse.model_validate(settings_row)
    await record_audit(db, request, AuditAction.WINNERS_REVEALED, user_id=admin.user_id)
    return response
