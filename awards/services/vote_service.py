"""Vote service: the cast path and per-user vote reads.

A cast runs the checks in a fixed order and stops at the first failure:

1. voting window policy (re-read from the database on every call)
2. category exists and is active
3. nomination is approved and belongs to the category
4. the voter has no vote in the category yet

Step 4 is only a fast path. The unique constraint on (user_id, category_id)
is what guarantees a single vote per category when requests race; a
violation at commit time is reported as ``AlreadyVotedError`` and never
retried.
"""
import logging
from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from awards.models.base import AuditAction
from awards.models.category import Category
from awards.models.nomination import Nomination
from awards.models.vote import Vote, VOTE_UNIQUE_CONSTRAINT
from awards.services.audit_service import AuditService
from awards.services.category_service import CategoryService
from awards.services.nomination_service import NominationService
from awards.services.settings_service import SettingsService
from awards.utils.exceptions import AlreadyVotedError

logger = logging.getLogger(__name__)

# Postgres reports the constraint name, SQLite the column list.
_UNIQUE_VIOLATION_MARKERS = (VOTE_UNIQUE_CONSTRAINT, "votes.user_id, votes.category_id")


def _is_vote_unique_violation(exc: IntegrityError) -> bool:
    constraint_name = getattr(getattr(exc.orig, "diag", None), "constraint_name", None)
    if constraint_name == VOTE_UNIQUE_CONSTRAINT:
        return True
    message = str(exc.orig if exc.orig is not None else exc)
    return any(marker in message for marker in _UNIQUE_VIOLATION_MARKERS)


class VoteService:
    """Service for casting and reading votes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings_service = SettingsService(db)
        self.category_service = CategoryService(db)
        self.nomination_service = NominationService(db)
        self.audit_service = AuditService(db)

    async def cast_vote(
        self,
        user_id: int,
        category_id: int,
        nomination_id: int,
        ip_address: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Vote:
        """
        Cast a vote and return the committed row.

        Raises:
            VotingWindowError: VOTING_DISABLED, VOTING_NOT_STARTED or VOTING_ENDED
            CategoryNotFoundError: Category missing or inactive
            NominationNotEligibleError: Nomination missing, in another category or not approved
            AlreadyVotedError: The user already has a vote in this category
        """
        now = now or datetime.now(UTC)

        decision = await self.settings_service.check_voting_window(now)
        if not decision.permitted:
            logger.info(f"Vote by user {user_id} in category {category_id} denied: {decision.reason}")
            decision.raise_for_denial()

        await self.category_service.get_active_category(category_id)
        await self.nomination_service.get_eligible_nomination(nomination_id, category_id)

        if await self.has_voted(user_id, category_id):
            logger.info(f"User {user_id} already voted in category {category_id}")
            raise AlreadyVotedError()

        vote = Vote(
            user_id=user_id,
            category_id=category_id,
            nomination_id=nomination_id,
            cast_at=now,
            ip_address=ip_address,
        )
        self.db.add(vote)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if _is_vote_unique_violation(exc):
                logger.info(f"Concurrent duplicate vote rejected for user {user_id} in category {category_id}")
                raise AlreadyVotedError() from exc
            raise
        # Commit must stay the last statement of a cast: callers retry busy
        # errors, and nothing after a successful commit may raise one.
        # Detached, so a rollback inside the audit write cannot expire it
        self.db.expunge(vote)

        logger.info(
            f"Vote cast: vote={vote.vote_id}, user={user_id}, category={category_id}, nomination={nomination_id}"
        )

        await self.audit_service.record(
            AuditAction.VOTE_CAST,
            user_id=user_id,
            details={"vote_id": vote.vote_id, "category_id": category_id, "nomination_id": nomination_id},
            ip_address=ip_address,
        )
        return vote

    async def has_voted(self, user_id: int, category_id: int) -> bool:
        result = await self.db.execute(
            select(Vote.vote_id)
            .where(Vote.user_id == user_id)
            .where(Vote.category_id == category_id)
            .limit(1)
        )
        return result.scalar() is not None

    async def get_voted_category_ids(self, user_id: int) -> list[int]:
        """Return the sorted ids of every category the user has voted in."""
        result = await self.db.execute(
            select(Vote.category_id).where(Vote.user_id == user_id).distinct().order_by(Vote.category_id)
        )
        return list(result.scalars().all())

    async def get_user_votes(self, user_id: int) -> list[dict]:
        """Return the user's votes with category and nominee names, oldest first."""
        result = await self.db.execute(
            select(Vote, Category.name, Nomination.nominee_name)
            .select_from(Vote)
            .join(Category, Category.category_id == Vote.category_id)
            .join(Nomination, Nomination.nomination_id == Vote.nomination_id)
            .where(Vote.user_id == user_id)
            .order_by(Vote.cast_at, Vote.vote_id)
        )
        return [
            {"vote": vote, "category_name": category_name, "nominee_name": nominee_name}
            for vote, category_name, nominee_name in result.all()
        ]
