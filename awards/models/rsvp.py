"""Event RSVP model."""
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, UTC
from awards.database import Base


class RSVP(Base):
    """Attendance response; at most one per user."""

    __tablename__ = "rsvps"

    rsvp_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False)
    attending: Mapped[bool] = mapped_column(Boolean, nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<RSVP(user_id={self.user_id}, attending={self.attending}, guests={self.guest_count})>"
