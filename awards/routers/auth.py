"""Authentication endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from awards.database import get_db
from awards.dependencies import get_current_user
from awards.models.base import AuditAction
from awards.models.user import User
from awards.routers.common import record_audit
from awards.schemas.auth import (
    AuthTokenResponse,
    ResendCodeRequest,
    SigninRequest,
    SignupRequest,
    SignupResponse,
    UserInfo,
    VerifyEmailRequest,
)
from awards.schemas.base import MessageResponse
from awards.services import AuthService, AuthError
from awards.utils.cookies import clear_access_token_cookie, set_access_token_cookie

logger = logging.getLogger(__name__)

router = APIRouter()

AUTH_ERROR_STATUS = {
    "EMAIL_TAKEN": 409,
    "WEAK_PASSWORD": 400,
    "USER_NOT_FOUND": 404,
    "ALREADY_VERIFIED": 400,
    "INVALID_CODE": 400,
    "CODE_EXPIRED": 400,
    "INVALID_CREDENTIALS": 401,
    "EMAIL_NOT_VERIFIED": 403,
}


def _auth_http_error(exc: AuthError) -> HTTPException:
    return HTTPException(
        status_code=AUTH_ERROR_STATUS.get(exc.code, 400),
        detail={"error": exc.code, "message": exc.message},
    )


def _token_response(user: User, token: str, expires_in: int, response: Response) -> AuthTokenResponse:
    set_access_token_cookie(response, token)
    return AuthTokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=expires_in,
        user=UserInfo.model_validate(user),
    )


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    request_body: SignupRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """Register an account and email a verification code."""
    try:
        user = await AuthService(db).signup(request_body.email, request_body.password, request_body.display_name)
    except AuthError as exc:
        raise _auth_http_error(exc) from exc

    signup_response = SignupResponse(
        message="Account created. Check your email for the verification code.",
        user_id=user.user_id,
        email=user.email,
    )
    await record_audit(db, request, AuditAction.USER_SIGNUP, user_id=user.user_id, details={"role": user.role})
    return signup_response


@router.post("/verify-email", response_model=AuthTokenResponse)
async def verify_email(
    request_body: VerifyEmailRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> AuthTokenResponse:
    try:
        user, token, expires_in = await AuthService(db).verify_email(request_body.email, request_body.code)
    except AuthError as exc:
        raise _auth_http_error(exc) from exc

    token_response = _token_response(user, token, expires_in, response)
    await record_audit(db, request, AuditAction.EMAIL_VERIFIED, user_id=user.user_id)
    return token_response


@router.post("/resend-code", response_model=MessageResponse)
async def resend_code(
    request_body: ResendCodeRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await AuthService(db).resend_code(request_body.email)
    except AuthError as exc:
        raise _auth_http_error(exc) from exc
    return MessageResponse(message="Verification code sent")


@router.post("/signin", response_model=AuthTokenResponse)
async def signin(
    request_body: SigninRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> AuthTokenResponse:
    """Authenticate with email and password and issue an access token."""
    try:
        user, token, expires_in = await AuthService(db).signin(request_body.email, request_body.password)
    except AuthError as exc:
        raise _auth_http_error(exc) from exc

    token_response = _token_response(user, token, expires_in, response)
    await record_audit(db, request, AuditAction.USER_SIGNIN, user_id=user.user_id)
    return token_response


@router.post("/signout", response_model=MessageResponse)
async def signout(response: Response) -> MessageResponse:
    clear_access_token_cookie(response)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=UserInfo)
async def get_me(user: User = Depends(get_current_user)) -> UserInfo:
    return UserInfo.model_validate(user)
