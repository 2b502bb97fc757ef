"""Nomination model."""
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, UTC
from awards.database import Base
from awards.models.base import NominationStatus


class Nomination(Base):
    """A nominee submitted for a category; only APPROVED rows can receive votes."""

    __tablename__ = "nominations"

    nomination_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.category_id"), nullable=False)
    nominee_name: Mapped[str] = mapped_column(String(200), nullable=False)
    nominee_email: Mapped[str] = mapped_column(String(255), nullable=False)
    organization: Mapped[str | None] = mapped_column(String(200), nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_by_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=NominationStatus.PENDING.value)
    reviewed_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.user_id"), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    __table_args__ = (
        Index("ix_nominations_category_status", "category_id", "status"),
    )

    def __repr__(self) -> str:
        return (f"<Nomination(nomination_id={self.nomination_id}, category_id={self.category_id}, "
                f"status={self.status})>")
