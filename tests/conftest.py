"""Pytest configuration and fixtures."""
import os
import uuid
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

BASE_DIR = Path(__file__).resolve().parent.parent
TEST_DB_PATH = BASE_DIR / "test.db"

# Ensure the application uses a dedicated file-based SQLite database during tests.
# A file (not :memory:) lets concurrent sessions contend on the same database.
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["ENVIRONMENT"] = "test"
os.environ["EMAIL_API_KEY"] = ""
os.environ["ADMIN_EMAILS"] = "admin@nhea.com"
os.environ.setdefault("LOG_DIR", str(BASE_DIR / "logs"))

from awards.config import get_settings
from awards.database import Base
from awards.models import Category, Nomination, NominationStatus, User, UserRole
from awards.services.auth_service import AuthService
from awards.utils.passwords import hash_password

settings = get_settings()

DEFAULT_PASSWORD = "TestPassword123"
DEFAULT_REASON = (
    "Consistently goes above and beyond for colleagues and the community, "
    "leading projects that made a measurable difference this year."
)
_password_hash_cache: dict[str, str] = {}


@pytest.fixture(scope="session", autouse=True)
def create_schema():
    """Create the test database schema from the model metadata."""
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    import awards.models  # noqa: F401

    sync_engine = create_engine(f"sqlite:///{TEST_DB_PATH}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    yield

    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            # On Windows the file may still be in use; it is recreated next run
            pass


@pytest.fixture
async def test_engine():
    """Per-test engine; every table is emptied afterwards so tests stay independent."""
    engine = create_async_engine(settings.database_url, echo=False)

    yield engine

    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()
        await session.close()


@pytest.fixture
async def test_app(session_factory):
    """Create test app with database override."""
    from awards.main import app
    from awards.database import get_db

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db_session):
    """Factory for creating users directly in the database."""

    async def _create_user(
        email: str | None = None,
        *,
        password: str = DEFAULT_PASSWORD,
        display_name: str | None = None,
        role: UserRole = UserRole.PUBLIC,
        verified: bool = True,
    ) -> User:
        unique_id = uuid.uuid4().hex[:8]
        if password not in _password_hash_cache:
            _password_hash_cache[password] = hash_password(password)

        user = User(
            email=email or f"user{unique_id}@example.com",
            password_hash=_password_hash_cache[password],
            display_name=display_name or f"User {unique_id}",
            role=role.value,
            email_verified=verified,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def category_factory(db_session):
    async def _create_category(name: str | None = None, *, active: bool = True) -> Category:
        category = Category(
            name=name or f"Category {uuid.uuid4().hex[:8]}",
            description="Recognizes outstanding contributions",
            active=active,
        )
        db_session.add(category)
        await db_session.commit()
        await db_session.refresh(category)
        return category

    return _create_category


@pytest.fixture
def nomination_factory(db_session, user_factory):
    """Factory for nominations; APPROVED by default so they can receive votes."""

    async def _create_nomination(
        category: Category,
        *,
        status: NominationStatus = NominationStatus.APPROVED,
        nominee_name: str | None = None,
        submitter: User | None = None,
    ) -> Nomination:
        submitter = submitter or await user_factory()
        nomination = Nomination(
            category_id=category.category_id,
            nominee_name=nominee_name or f"Nominee {uuid.uuid4().hex[:6]}",
            nominee_email=f"nominee{uuid.uuid4().hex[:6]}@example.com",
            organization="Acme Health",
            reason=DEFAULT_REASON,
            submitted_by_id=submitter.user_id,
            status=status.value,
        )
        db_session.add(nomination)
        await db_session.commit()
        await db_session.refresh(nomination)
        return nomination

    return _create_nomination


@pytest.fixture
def auth_headers(db_session):
    """Build a bearer Authorization header for a user."""

    def _headers(user: User) -> dict[str, str]:
        token, _ = AuthService(db_session).create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers
