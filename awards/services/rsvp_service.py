"""Service for event RSVPs."""
import logging
from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from awards.config import get_settings
from awards.models.rsvp import RSVP
from awards.utils.exceptions import InvalidGuestCountError

logger = logging.getLogger(__name__)


class RSVPService:
    """One RSVP per user, created on first submission and updated in place after."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def get_rsvp(self, user_id: int) -> Optional[RSVP]:
        result = await self.db.execute(select(RSVP).where(RSVP.user_id == user_id))
        return result.scalar_one_or_none()

    async def upsert_rsvp(self, user_id: int, attending: bool, guest_count: int = 0) -> RSVP:
        """Create or update the user's RSVP.

        Raises:
            InvalidGuestCountError: guest_count outside 0..max_rsvp_guests
        """
        if guest_count < 0 or guest_count > self.settings.max_rsvp_guests:
            raise InvalidGuestCountError(
                f"Guest count must be between 0 and {self.settings.max_rsvp_guests}"
            )

        rsvp = await self.get_rsvp(user_id)
        if rsvp is None:
            rsvp = RSVP(user_id=user_id, attending=attending, guest_count=guest_count)
            self.db.add(rsvp)
            try:
                await self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent first submission; update that row instead.
                await self.db.rollback()
                rsvp = await self.get_rsvp(user_id)
                if rsvp is None:
                    raise
                rsvp.attending = attending
                rsvp.guest_count = guest_count
                rsvp.updated_at = datetime.now(UTC)
                await self.db.commit()
        else:
            rsvp.attending = attending
            rsvp.guest_count = guest_count
            rsvp.updated_at = datetime.now(UTC)
            await self.db.commit()

        await self.db.refresh(rsvp)
        logger.info(f"RSVP saved for user {user_id}: attending={attending}, guests={guest_count}")
        return rsvp

    async def get_rsvp_stats(self) -> dict[str, int]:
        """Totals across all RSVPs; guests are counted for attending responses only."""
        total = await self.db.execute(select(func.count(RSVP.rsvp_id)))
        attending = await self.db.execute(select(func.count(RSVP.rsvp_id)).where(RSVP.attending.is_(True)))
        guests = await self.db.execute(
            select(func.coalesce(func.sum(RSVP.guest_count), 0)).where(RSVP.attending.is_(True))
        )
        total_rsvps = int(total.scalar() or 0)
        attending_count = int(attending.scalar() or 0)
        return {
            "total_rsvps": total_rsvps,
            "attending": attending_count,
            "not_attending": total_rsvps - attending_count,
            "total_guests": int(guests.scalar() or 0),
        }
