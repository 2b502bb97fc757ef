"""Shared enumerations for SQLAlchemy models."""
from enum import Enum


class UserRole(str, Enum):
    """Account role enumeration for type safety."""
    PUBLIC = "PUBLIC"
    ADMIN = "ADMIN"


class NominationStatus(str, Enum):
    """Nomination review status enumeration for type safety."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AuditAction(str, Enum):
    """Actions recorded in the audit log."""
    USER_SIGNUP = "USER_SIGNUP"
    EMAIL_VERIFIED = "EMAIL_VERIFIED"
    USER_SIGNIN = "USER_SIGNIN"
    CATEGORY_CREATED = "CATEGORY_CREATED"
    CATEGORY_UPDATED = "CATEGORY_UPDATED"
    NOMINATION_SUBMITTED = "NOMINATION_SUBMITTED"
    NOMINATION_REVIEWED = "NOMINATION_REVIEWED"
    VOTE_CAST = "VOTE_CAST"
    SETTINGS_UPDATED = "SETTINGS_UPDATED"
    WINNERS_REVEALED = "WINNERS_REVEALED"
    RSVP_SUBMITTED = "RSVP_SUBMITTED"
