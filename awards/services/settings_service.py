"""Service for the voting settings singleton."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from awards.models.voting_settings import VotingSettings
from awards.services.voting_window import WindowDecision, evaluate_voting_window
from awards.utils.datetime_helpers import ensure_utc
from awards.utils.exceptions import InvalidVotingWindowError
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class SettingsService:
    """Read-through accessor and admin mutations for the voting window policy.

    The row is re-read from the database on every call. Nothing is cached
    between requests, so an admin toggling voting takes effect immediately.
    """

    UPDATABLE_FIELDS = ("voting_enabled", "voting_start_at", "voting_end_at")

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self) -> Optional[VotingSettings]:
        result = await self.session.execute(
            select(VotingSettings).order_by(VotingSettings.settings_id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_voting_settings(self) -> VotingSettings:
        """Return the settings row, creating the default (enabled, unbounded) one if absent."""
        settings_row = await self._load()
        if settings_row is not None:
            return settings_row

        settings_row = VotingSettings(
            voting_enabled=True,
            voting_start_at=None,
            voting_end_at=None,
            results_announced=False,
            updated_at=datetime.now(timezone.utc),
        )
        self.session.add(settings_row)
        await self.session.commit()
        await self.session.refresh(settings_row)
        logger.info("Created default voting settings")
        return settings_row

    async def check_voting_window(self, now: Optional[datetime] = None) -> WindowDecision:
        """Evaluate the current policy at ``now`` (defaults to the current time)."""
        settings_row = await self.get_voting_settings()
        return evaluate_voting_window(settings_row, now or datetime.now(timezone.utc))

    async def update_voting_settings(
        self,
        changes: Dict[str, Any],
        updated_by: Optional[int] = None,
    ) -> VotingSettings:
        """
        Apply a partial update to the voting window.

        Args:
            changes: Field name to new value; only keys present are applied, so
                an explicit None clears a bound.
            updated_by: User ID of the admin making the change

        Raises:
            ValueError: If a key is not updatable
            InvalidVotingWindowError: If the resulting start is not before the end
        """
        unknown = set(changes) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown settings fields: {', '.join(sorted(unknown))}")

        settings_row = await self.get_voting_settings()

        start_at = ensure_utc(changes.get("voting_start_at", settings_row.voting_start_at))
        end_at = ensure_utc(changes.get("voting_end_at", settings_row.voting_end_at))
        if start_at is not None and end_at is not None and start_at >= end_at:
            raise InvalidVotingWindowError()

        if "voting_enabled" in changes:
            settings_row.voting_enabled = bool(changes["voting_enabled"])
        if "voting_start_at" in changes:
            settings_row.voting_start_at = start_at
        if "voting_end_at" in changes:
            settings_row.voting_end_at = end_at
        settings_row.updated_at = datetime.now(timezone.utc)
        settings_row.updated_by_id = updated_by

        await self.session.commit()
        await self.session.refresh(settings_row)

        logger.info(
            f"Voting settings updated by {updated_by or 'system'}: enabled={settings_row.voting_enabled}, "
            f"start={settings_row.voting_start_at}, end={settings_row.voting_end_at}"
        )
        return settings_row

    async def reveal_winners(self, updated_by: Optional[int] = None) -> VotingSettings:
        """Mark results as announced so non-admins can see winners."""
        settings_row = await self.get_voting_settings()
        settings_row.results_announced = True
        settings_row.updated_at = datetime.now(timezone.utc)
        settings_row.updated_by_id = updated_by
        await self.session.commit()
        await self.session.refresh(settings_row)
        logger.info(f"Winners revealed by {updated_by or 'system'}")
        return settings_row
