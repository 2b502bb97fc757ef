"""Tests for the authentication API endpoints."""
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select

from awards.models import AuditLog, User

API_BASE_URL = "http://test/api"


@pytest.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as http_client:
        yield http_client


async def _verification_code(db_session, email: str) -> str:
    result = await db_session.execute(
        select(User.verification_code).where(User.email == email)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_signup_verify_signin_flow(client, db_session):
    signup = await client.post(
        "/auth/signup",
        json={"email": "Nominator@Example.com", "password": "GoodPassw0rd", "displayName": "Nominator"},
    )
    assert signup.status_code == 201
    assert signup.json()["email"] == "nominator@example.com"

    early_signin = await client.post(
        "/auth/signin", json={"email": "nominator@example.com", "password": "GoodPassw0rd"}
    )
    assert early_signin.status_code == 403
    assert early_signin.json()["detail"]["error"] == "EMAIL_NOT_VERIFIED"

    code = await _verification_code(db_session, "nominator@example.com")
    verify = await client.post("/auth/verify-email", json={"email": "nominator@example.com", "code": code})
    assert verify.status_code == 200
    verified = verify.json()
    assert verified["user"]["emailVerified"] is True
    assert verified["tokenType"] == "bearer"

    signin = await client.post("/auth/signin", json={"email": "nominator@example.com", "password": "GoodPassw0rd"})
    assert signin.status_code == 200
    token = signin.json()["accessToken"]

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["displayName"] == "Nominator"
    assert me.json()["role"] == "PUBLIC"

    actions = await db_session.execute(select(AuditLog.action).order_by(AuditLog.audit_id))
    assert actions.scalars().all() == ["USER_SIGNUP", "EMAIL_VERIFIED", "USER_SIGNIN"]


@pytest.mark.asyncio
async def test_signin_sets_http_only_cookie(client, user_factory):
    user = await user_factory(password="CookiePassw0rd")

    response = await client.post("/auth/signin", json={"email": user.email, "password": "CookiePassw0rd"})

    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("awards_access_token=")
    assert "HttpOnly" in set_cookie


@pytest.mark.asyncio
async def test_signup_duplicate_email(client, user_factory):
    user = await user_factory()

    response = await client.post(
        "/auth/signup",
        json={"email": user.email, "password": "GoodPassw0rd", "displayName": "Copycat"},
    )

    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "EMAIL_TAKEN"


@pytest.mark.asyncio
async def test_signup_weak_password(client):
    response = await client.post(
        "/auth/signup",
        json={"email": "weak@example.com", "password": "password", "displayName": "Weak"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "WEAK_PASSWORD"


@pytest.mark.asyncio
async def test_signin_bad_credentials(client, user_factory):
    user = await user_factory()

    response = await client.post("/auth/signin", json={"email": user.email, "password": "WrongPassw0rd"})

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_malformed_code_and_unknown_resend(client):
    await client.post(
        "/auth/signup",
        json={"email": "wrongcode@example.com", "password": "GoodPassw0rd", "displayName": "Wrong Code"},
    )

    response = await client.post("/auth/verify-email", json={"email": "wrongcode@example.com", "code": "12345"})
    assert response.status_code == 422

    response = await client.post(
        "/auth/resend-code", json={"email": "unknown@example.com"}
    )
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_me_requires_credentials(client):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["detail"] == "missing_credentials"


@pytest.mark.asyncio
async def test_signout_clears_cookie(client):
    response = await client.post("/auth/signout")

    assert response.status_code == 200
    assert response.json() == {"message": "Signed out"}
    assert "awards_access_token=" in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_health_and_status(client):
    health = await client.get("/health")
    status = await client.get("/status")

    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert status.json()["environment"] == "test"
    assert status.json()["email_delivery"] == "log"
