"""Vote ledger model."""
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, UTC
from awards.database import Base

VOTE_UNIQUE_CONSTRAINT = "uq_votes_user_category"


class Vote(Base):
    """A cast vote. Rows are never updated or deleted."""

    __tablename__ = "votes"

    vote_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.category_id"), nullable=False)
    nomination_id: Mapped[int] = mapped_column(ForeignKey("nominations.nomination_id"), nullable=False)
    cast_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "category_id", name=VOTE_UNIQUE_CONSTRAINT),
        Index("ix_votes_nomination", "nomination_id"),
    )

    def __repr__(self) -> str:
        return (f"<Vote(vote_id={self.vote_id}, user_id={self.user_id}, category_id={self.category_id}, "
                f"nomination_id={self.nomination_id})>")
