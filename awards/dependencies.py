"""FastAPI dependencies."""
import logging

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from awards.config import get_settings
from awards.database import get_db
from awards.models.user import User
from awards.services.auth_service import AuthService, AuthError

logger = logging.getLogger(__name__)

settings = get_settings()


async def get_current_user(
        request: Request,
        authorization: str | None = Header(default=None, alias="Authorization"),
        db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the current authenticated user via JWT access token.

    Checks for access token in the following order:
    1. HTTP-only cookie
    2. Authorization header (API clients)
    """
    token = request.cookies.get(settings.access_token_cookie_name)
    token_source = "cookie"

    if not token and authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status_code=401, detail="invalid_token")
        token_source = "header"

    if not token:
        raise HTTPException(status_code=401, detail="missing_credentials")

    auth_service = AuthService(db)
    try:
        payload = auth_service.decode_access_token(token)
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError, AuthError) as exc:
        raise HTTPException(status_code=401, detail="invalid_token") from exc

    user = await auth_service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="invalid_token")

    logger.debug(f"Authenticated user via JWT {token_source}: {user.user_id}")
    return user


async def get_verified_user(user: User = Depends(get_current_user)) -> User:
    """Require a user whose email address has been verified."""
    if not user.email_verified:
        raise HTTPException(status_code=403, detail="email_verification_required")
    return user


async def get_admin_user(user: User = Depends(get_current_user)) -> User:
    """Require an administrator."""
    if not user.is_admin:
        logger.warning(f"Non-admin user {user.user_id} attempted to access an admin route")
        raise HTTPException(status_code=403, detail="admin_access_required")
    return user


def get_client_ip(request: Request) -> str | None:
    """Best-effort client address, honouring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None
