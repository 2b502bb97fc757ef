"""Leaderboard and results computation over the vote ledger."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from awards.config import get_settings
from awards.models.category import Category
from awards.models.nomination import Nomination
from awards.models.vote import Vote
from awards.services.settings_service import SettingsService
from awards.utils.exceptions import CategoryNotFoundError, ResultsNotAnnouncedError

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Rank nominees by votes.

    Ties on vote count go to the nominee whose first vote was cast earliest,
    then to the lower nomination id, so the order is stable between calls.
    Only nominees with at least one vote are ranked.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    def _ranked_nominees_stmt(self):
        vote_count = func.count(Vote.vote_id).label("vote_count")
        first_vote_at = func.min(Vote.cast_at).label("first_vote_at")
        return (
            select(
                Nomination.nomination_id,
                Nomination.nominee_name,
                Nomination.organization,
                Category.category_id,
                Category.name.label("category_name"),
                vote_count,
                first_vote_at,
            )
            .select_from(Vote)
            .join(Nomination, Nomination.nomination_id == Vote.nomination_id)
            .join(Category, Category.category_id == Vote.category_id)
            .group_by(
                Nomination.nomination_id,
                Nomination.nominee_name,
                Nomination.organization,
                Category.category_id,
                Category.name,
            )
            .order_by(vote_count.desc(), first_vote_at.asc(), Nomination.nomination_id.asc())
        )

    @staticmethod
    def _to_entries(rows) -> list[dict[str, Any]]:
        return [
            {
                "rank": index,
                "nomination_id": row.nomination_id,
                "nominee_name": row.nominee_name,
                "organization": row.organization,
                "category_id": row.category_id,
                "category_name": row.category_name,
                "vote_count": row.vote_count,
                "first_vote_at": row.first_vote_at,
            }
            for index, row in enumerate(rows, start=1)
        ]

    async def get_top_nominees(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Top nominees across all categories."""
        stmt = self._ranked_nominees_stmt().limit(limit or self.settings.leaderboard_limit)
        result = await self.db.execute(stmt)
        return self._to_entries(result.all())

    async def get_leaderboard(self, category_id: int, limit: int | None = None) -> list[dict[str, Any]]:
        """Top nominees within one category.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        if await self.db.get(Category, category_id) is None:
            raise CategoryNotFoundError()

        stmt = (
            self._ranked_nominees_stmt()
            .where(Vote.category_id == category_id)
            .limit(limit or self.settings.leaderboard_limit)
        )
        result = await self.db.execute(stmt)
        return self._to_entries(result.all())

    async def get_results(self, *, is_admin: bool) -> list[dict[str, Any]]:
        """Per-category standings with the winner of each active category.

        Raises:
            ResultsNotAnnouncedError: Non-admin asked before winners were revealed
        """
        if not is_admin:
            voting_settings = await SettingsService(self.db).get_voting_settings()
            if not voting_settings.results_announced:
                raise ResultsNotAnnouncedError()

        categories = await self.db.execute(
            select(Category).where(Category.active.is_(True)).order_by(Category.category_id)
        )

        results = []
        for category in categories.scalars().all():
            standings = await self.get_leaderboard(category.category_id)
            results.append({
                "category_id": category.category_id,
                "category_name": category.name,
                "winner": standings[0] if standings else None,
                "standings": standings,
            })
        return results
