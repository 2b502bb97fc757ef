"""Aggregate statistics for the admin dashboard and vote analytics."""
import logging
from typing import Any

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from awards.models.base import NominationStatus, UserRole
from awards.models.category import Category
from awards.models.nomination import Nomination
from awards.models.user import User
from awards.models.vote import Vote
from awards.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)


class StatisticsService:
    """Read-only aggregations. Results reflect committed votes only."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, stmt) -> int:
        result = await self.db.execute(stmt)
        return int(result.scalar() or 0)

    async def get_vote_analytics(self, top_limit: int | None = None) -> dict[str, Any]:
        """Totals, unique voters, per-category counts and the top nominees."""
        total_votes = await self._count(select(func.count(Vote.vote_id)))
        unique_voters = await self._count(select(func.count(distinct(Vote.user_id))))

        vote_count = func.count(Vote.vote_id).label("vote_count")
        by_category = await self.db.execute(
            select(Category.category_id, Category.name, vote_count)
            .select_from(Vote)
            .join(Category, Category.category_id == Vote.category_id)
            .group_by(Category.category_id, Category.name)
            .order_by(vote_count.desc(), Category.category_id)
        )
        votes_by_category = [
            {"category_id": row.category_id, "category_name": row.name, "vote_count": row.vote_count}
            for row in by_category.all()
        ]

        top_nominees = await LeaderboardService(self.db).get_top_nominees(top_limit)

        return {
            "total_votes": total_votes,
            "unique_voters": unique_voters,
            "votes_by_category": votes_by_category,
            "top_nominees": top_nominees,
        }

    async def get_dashboard_stats(self) -> dict[str, int]:
        return {
            "total_nominations": await self._count(select(func.count(Nomination.nomination_id))),
            "pending_nominations": await self._count(
                select(func.count(Nomination.nomination_id))
                .where(Nomination.status == NominationStatus.PENDING.value)
            ),
            "approved_nominations": await self._count(
                select(func.count(Nomination.nomination_id))
                .where(Nomination.status == NominationStatus.APPROVED.value)
            ),
            "total_votes": await self._count(select(func.count(Vote.vote_id))),
            "total_categories": await self._count(select(func.count(Category.category_id))),
            "total_users": await self._count(
                select(func.count(User.user_id)).where(User.role == UserRole.PUBLIC.value)
            ),
        }
