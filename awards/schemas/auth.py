"""Authentication schema definitions."""
from datetime import datetime
from typing import Optional

from pydantic import constr

from awards.schemas.base import BaseSchema

PasswordStr = constr(min_length=8, max_length=128)
EmailLike = constr(pattern=r"[^@\s]+@[^@\s]+\.[^@\s]+", min_length=5, max_length=255)
DisplayNameStr = constr(strip_whitespace=True, min_length=1, max_length=120)
VerificationCodeStr = constr(strip_whitespace=True, pattern=r"^\d{6}$")


class SignupRequest(BaseSchema):
    """Payload for creating a new account."""

    email: EmailLike
    password: PasswordStr
    display_name: DisplayNameStr


class VerifyEmailRequest(BaseSchema):
    email: EmailLike
    code: VerificationCodeStr


class ResendCodeRequest(BaseSchema):
    email: EmailLike


class SigninRequest(BaseSchema):
    """Sign-in payload."""

    email: EmailLike
    password: constr(min_length=1, max_length=128)


class UserInfo(BaseSchema):
    user_id: int
    email: str
    display_name: str
    role: str
    email_verified: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class SignupResponse(BaseSchema):
    message: str
    user_id: int
    email: str


class AuthTokenResponse(BaseSchema):
    """Response containing JWT credentials."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserInfo
