"""Service for nomination submission, review and eligibility checks."""
from __future__ import annotations

import logging
from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from awards.models.base import NominationStatus
from awards.models.category import Category
from awards.models.nomination import Nomination
from awards.models.user import User
from awards.services.category_service import CategoryService
from awards.utils.exceptions import (
    InvalidReviewStatusError,
    NominationAlreadyReviewedError,
    NominationNotEligibleError,
    NominationNotFoundError,
    ReasonTooShortError,
)

logger = logging.getLogger(__name__)

MIN_REASON_LENGTH = 100
REVIEW_STATUSES = {NominationStatus.APPROVED.value, NominationStatus.REJECTED.value}


class NominationService:
    """Business logic for nominations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.category_service = CategoryService(db)

    async def submit_nomination(
        self,
        submitter: User,
        *,
        category_id: int,
        nominee_name: str,
        nominee_email: str,
        reason: str,
        organization: Optional[str] = None,
    ) -> Nomination:
        """Create a PENDING nomination in an active category."""
        reason = reason.strip()
        if len(reason) < MIN_REASON_LENGTH:
            raise ReasonTooShortError()

        await self.category_service.get_active_category(category_id)

        nomination = Nomination(
            category_id=category_id,
            nominee_name=nominee_name.strip(),
            nominee_email=nominee_email.strip().lower(),
            organization=organization.strip() if organization else None,
            reason=reason,
            submitted_by_id=submitter.user_id,
            status=NominationStatus.PENDING.value,
        )
        self.db.add(nomination)
        await self.db.commit()
        await self.db.refresh(nomination)

        logger.info(
            f"Nomination {nomination.nomination_id} submitted by user {submitter.user_id} "
            f"for category {category_id}"
        )
        return nomination

    async def list_nominations(
        self,
        viewer: User,
        *,
        status: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> list[dict]:
        """List nominations visible to ``viewer``, newest first.

        Non-admins only ever see APPROVED nominations and never see contact
        details; the ``status`` filter applies to admins only.
        """
        stmt = (
            select(Nomination, Category.name, User.display_name, User.email)
            .join(Category, Category.category_id == Nomination.category_id)
            .join(User, User.user_id == Nomination.submitted_by_id)
            .order_by(Nomination.created_at.desc(), Nomination.nomination_id.desc())
        )

        if not viewer.is_admin:
            stmt = stmt.where(Nomination.status == NominationStatus.APPROVED.value)
        elif status:
            stmt = stmt.where(Nomination.status == status.upper())

        if category_id is not None:
            stmt = stmt.where(Nomination.category_id == category_id)

        result = await self.db.execute(stmt)

        listings = []
        for nomination, category_name, submitter_name, submitter_email in result.all():
            listings.append({
                "nomination": nomination,
                "category_name": category_name,
                "submitted_by_name": submitter_name,
                "submitted_by_email": submitter_email if viewer.is_admin else None,
            })
        return listings

    async def review_nomination(self, reviewer: User, nomination_id: int, status: str) -> Nomination:
        """Move a PENDING nomination to APPROVED or REJECTED.

        Raises:
            InvalidReviewStatusError: Status is not APPROVED or REJECTED
            NominationNotFoundError: No such nomination
            NominationAlreadyReviewedError: Nomination is no longer PENDING
        """
        normalized = (status or "").strip().upper()
        if normalized not in REVIEW_STATUSES:
            raise InvalidReviewStatusError()

        reviewer_id = reviewer.user_id
        nomination = await self.db.get(Nomination, nomination_id)
        if nomination is None:
            raise NominationNotFoundError()

        # Conditional on PENDING so concurrent reviews cannot both apply
        result = await self.db.execute(
            update(Nomination)
            .where(Nomination.nomination_id == nomination_id)
            .where(Nomination.status == NominationStatus.PENDING.value)
            .values(status=normalized, reviewed_by_id=reviewer_id, reviewed_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            logger.info(f"Nomination {nomination_id} already reviewed, rejecting review by user {reviewer_id}")
            raise NominationAlreadyReviewedError()

        await self.db.commit()
        await self.db.refresh(nomination)

        logger.info(f"Nomination {nomination_id} reviewed as {normalized} by user {reviewer_id}")
        return nomination

    async def get_eligible_nomination(self, nomination_id: int, category_id: int) -> Nomination:
        """Return the nomination if it can receive votes in ``category_id``.

        Not found, wrong category and not approved all raise the same error so
        voters cannot probe moderation state.

        Raises:
            NominationNotEligibleError
        """
        result = await self.db.execute(
            select(Nomination)
            .where(Nomination.nomination_id == nomination_id)
            .where(Nomination.category_id == category_id)
            .where(Nomination.status == NominationStatus.APPROVED.value)
        )
        nomination = result.scalar_one_or_none()
        if nomination is None:
            raise NominationNotEligibleError()
        return nomination
