"""Votes API router."""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from awards.config import get_settings
from awards.database import get_db
from awards.dependencies import get_admin_user, get_client_ip, get_current_user, get_verified_user
from awards.models.user import User
from awards.routers.common import http_error
from awards.schemas.vote import (
    CastVoteRequest,
    LeaderboardResponse,
    MyVote,
    MyVoteCategoriesResponse,
    MyVotesResponse,
    ResultsResponse,
    VoteAnalyticsResponse,
    VoteCastResponse,
    VoteDetail,
)
from awards.services import LeaderboardService, SettingsService, StatisticsService, VoteService
from awards.utils.exceptions import (
    AlreadyVotedError,
    CategoryNotFoundError,
    NominationNotEligibleError,
    ResultsNotAnnouncedError,
    VotingWindowError,
)

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.post("", response_model=VoteCastResponse, status_code=201)
async def cast_vote(
    request_body: CastVoteRequest,
    request: Request,
    user: User = Depends(get_verified_user),
    db: AsyncSession = Depends(get_db),
):
    """Cast the caller's single vote in a category."""
    vote_service = VoteService(db)
    ip_address = get_client_ip(request)
    # A rollback expires 'user', so only this copy is read inside the loop
    user_id = user.user_id
    max_attempts = settings.vote_cast_max_attempts

    for attempt in range(1, max_attempts + 1):
        try:
            vote = await vote_service.cast_vote(
                user_id,
                request_body.category_id,
                request_body.nomination_id,
                ip_address=ip_address,
            )
            break
        except (VotingWindowError, NominationNotEligibleError) as e:
            raise http_error(400, e)
        except CategoryNotFoundError as e:
            raise http_error(404, e)
        except AlreadyVotedError as e:
            raise http_error(409, e)
        except OperationalError as e:
            await db.rollback()
            if attempt == max_attempts:
                logger.error(
                    f"Vote cast for user {user_id} failed after {attempt} attempts: {e}",
                    exc_info=True,
                )
                raise HTTPException(
                    status_code=500,
                    detail={"error": "server_error", "message": "Could not record vote, please try again"},
                )
            logger.warning(
                f"Database busy while casting vote for user {user_id}, retrying "
                f"(attempt {attempt}/{max_attempts})"
            )
            await asyncio.sleep(settings.vote_cast_retry_delay_seconds * attempt)

    return VoteCastResponse(message="Vote cast successfully", vote=VoteDetail.model_validate(vote))


@router.get("/me", response_model=MyVoteCategoriesResponse)
async def get_my_voted_categories(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Category ids the caller has already voted in."""
    category_ids = await VoteService(db).get_voted_category_ids(user.user_id)
    return MyVoteCategoriesResponse(category_ids=category_ids)


@router.get("/my-votes", response_model=MyVotesResponse)
async def get_my_votes(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await VoteService(db).get_user_votes(user.user_id)
    return MyVotesResponse(
        votes=[
            MyVote(
                vote_id=row["vote"].vote_id,
                category_id=row["vote"].category_id,
                category_name=row["category_name"],
                nomination_id=row["vote"].nomination_id,
                nominee_name=row["nominee_name"],
                cast_at=row["vote"].cast_at,
            )
            for row in rows
        ]
    )


@router.get("/analytics", response_model=VoteAnalyticsResponse)
async def get_vote_analytics(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    analytics = await StatisticsService(db).get_vote_analytics()
    return VoteAnalyticsResponse(**analytics)


@router.get("/leaderboard/{category_id}", response_model=LeaderboardResponse)
async def get_category_leaderboard(
    category_id: int,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        entries = await LeaderboardService(db).get_leaderboard(category_id)
    except CategoryNotFoundError as e:
        raise http_error(404, e)
    return LeaderboardResponse(category_id=category_id, entries=entries)


@router.get("/results", response_model=ResultsResponse)
async def get_results(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Winners per category. Admins can always see them; everyone else once revealed."""
    try:
        categories = await LeaderboardService(db).get_results(is_admin=user.is_admin)
    except ResultsNotAnnouncedError as e:
        raise http_error(403, e)
    voting_settings = await SettingsService(db).get_voting_settings()
    return ResultsResponse(results_announced=voting_settings.results_announced, categories=categories)
