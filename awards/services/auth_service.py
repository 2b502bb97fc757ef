"""Authentication and account verification."""
from __future__ import annotations

import hmac
import logging
from datetime import UTC, datetime, timedelta
from typing import Optional

import jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from awards.config import get_settings
from awards.models.base import UserRole
from awards.models.user import User
from awards.services.email_client import EmailClient, get_email_client
from awards.utils.datetime_helpers import ensure_utc
from awards.utils.exceptions import AwardsError
from awards.utils.passwords import (
    PasswordValidationError,
    generate_verification_code,
    hash_password,
    validate_password_strength,
    verify_password,
)

logger = logging.getLogger(__name__)

AUTH_ERROR_MESSAGES = {
    "EMAIL_TAKEN": "Email already registered",
    "WEAK_PASSWORD": "Password does not meet the strength requirements",
    "USER_NOT_FOUND": "User not found",
    "ALREADY_VERIFIED": "Email already verified",
    "INVALID_CODE": "Invalid verification code",
    "CODE_EXPIRED": "Verification code expired",
    "INVALID_CREDENTIALS": "Invalid credentials",
    "EMAIL_NOT_VERIFIED": "Please verify your email first",
    "token_expired": "Token expired, please sign in again",
    "invalid_token": "Invalid token, please sign in again",
}


class AuthError(AwardsError):
    """Raised when authentication or verification fails."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        super().__init__(message or AUTH_ERROR_MESSAGES.get(code, "Authentication failed"))


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Service responsible for credentials, email verification and JWT issuance."""

    def __init__(self, db: AsyncSession, *, email_client: EmailClient | None = None):
        self.db = db
        self.settings = get_settings()
        self.email_client = email_client or get_email_client()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Registration and verification
    # ------------------------------------------------------------------
    def _new_verification_code(self) -> tuple[str, datetime]:
        expires_at = datetime.now(UTC) + timedelta(minutes=self.settings.verification_code_ttl_minutes)
        return generate_verification_code(), expires_at

    async def signup(self, email: str, password: str, display_name: str) -> User:
        """Create an unverified account and send its verification code."""
        try:
            validate_password_strength(password)
        except PasswordValidationError as exc:
            raise AuthError("WEAK_PASSWORD", str(exc)) from exc

        normalized_email = normalize_email(email)
        if await self.get_user_by_email(normalized_email):
            raise AuthError("EMAIL_TAKEN")

        code, expires_at = self._new_verification_code()
        role = UserRole.ADMIN if self.settings.is_admin_email(normalized_email) else UserRole.PUBLIC
        user = User(
            email=normalized_email,
            password_hash=hash_password(password),
            display_name=display_name.strip(),
            role=role.value,
            email_verified=False,
            verification_code=code,
            verification_code_expires_at=expires_at,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise AuthError("EMAIL_TAKEN") from exc
        await self.db.refresh(user)

        logger.info(f"Created user {user.user_id} ({role.value}) via signup")
        await self.email_client.send_verification_code(user.email, code)
        return user

    async def verify_email(self, email: str, code: str) -> tuple[User, str, int]:
        """Mark the account verified and issue an access token."""
        user = await self.get_user_by_email(email)
        if user is None:
            raise AuthError("USER_NOT_FOUND")
        if user.email_verified:
            raise AuthError("ALREADY_VERIFIED")
        if not user.verification_code or not hmac.compare_digest(user.verification_code, code.strip()):
            raise AuthError("INVALID_CODE")
        expires_at = ensure_utc(user.verification_code_expires_at)
        if expires_at is None or datetime.now(UTC) > expires_at:
            raise AuthError("CODE_EXPIRED")

        user.email_verified = True
        user.verification_code = None
        user.verification_code_expires_at = None
        user.last_login_at = datetime.now(UTC)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User {user.user_id} verified their email")
        token, expires_in = self.create_access_token(user)
        return user, token, expires_in

    async def resend_code(self, email: str) -> None:
        user = await self.get_user_by_email(email)
        if user is None:
            raise AuthError("USER_NOT_FOUND")
        if user.email_verified:
            raise AuthError("ALREADY_VERIFIED")

        code, expires_at = self._new_verification_code()
        user.verification_code = code
        user.verification_code_expires_at = expires_at
        await self.db.commit()

        await self.email_client.send_verification_code(user.email, code)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    async def signin(self, email: str, password: str) -> tuple[User, str, int]:
        """Check credentials and issue an access token."""
        user = await self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError("INVALID_CREDENTIALS")
        if not user.email_verified:
            raise AuthError("EMAIL_NOT_VERIFIED")

        user.last_login_at = datetime.now(UTC)
        await self.db.commit()
        await self.db.refresh(user)

        token, expires_in = self.create_access_token(user)
        return user, token, expires_in

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------
    def create_access_token(self, user: User) -> tuple[str, int]:
        expire = datetime.now(UTC) + timedelta(minutes=self.settings.access_token_exp_minutes)
        payload = {
            "sub": str(user.user_id),
            "role": user.role,
            "exp": int(expire.timestamp()),
        }
        token = jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.jwt_algorithm)
        return token, self.settings.access_token_exp_minutes * 60

    def decode_access_token(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("invalid_token") from exc
