"""Database models."""
from awards.models.base import AuditAction, NominationStatus, UserRole
from awards.models.user import User
from awards.models.category import Category
from awards.models.nomination import Nomination
from awards.models.vote import Vote, VOTE_UNIQUE_CONSTRAINT
from awards.models.voting_settings import VotingSettings
from awards.models.rsvp import RSVP
from awards.models.audit_log import AuditLog

__all__ = [
    "AuditAction",
    "NominationStatus",
    "UserRole",
    "User",
    "Category",
    "Nomination",
    "Vote",
    "VOTE_UNIQUE_CONSTRAINT",
    "VotingSettings",
    "RSVP",
    "AuditLog",
]
