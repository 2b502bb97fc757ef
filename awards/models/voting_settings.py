"""Singleton event settings row holding the voting window policy."""
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, UTC
from awards.database import Base


class VotingSettings(Base):
    """Admin-controlled voting window and results flag."""

    __tablename__ = "voting_settings"

    settings_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voting_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    voting_start_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    voting_end_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    results_announced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.user_id"), nullable=True)

    def __repr__(self) -> str:
        return (f"<VotingSettings(enabled={self.voting_enabled}, start={self.voting_start_at}, "
                f"end={self.voting_end_at})>")
