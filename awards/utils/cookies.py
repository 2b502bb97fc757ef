"""HTTP cookie helpers."""
from fastapi import Response

from awards.config import get_settings


def set_access_token_cookie(response: Response, token: str) -> None:
    """Set the access token cookie with secure defaults.

    The Secure flag is only dropped for local development so the cookie still
    works over plain http://localhost.
    """
    settings = get_settings()
    max_age = settings.access_token_exp_minutes * 60

    response.set_cookie(
        key=settings.access_token_cookie_name,
        value=token,
        httponly=True,
        secure=settings.environment != "development",
        samesite="lax",
        max_age=max_age,
        expires=max_age,
        path="/",
    )


def clear_access_token_cookie(response: Response) -> None:
    """Remove the access token cookie from the client."""

    settings = get_settings()
    response.delete_cookie(
        key=settings.access_token_cookie_name,
        path="/",
    )
