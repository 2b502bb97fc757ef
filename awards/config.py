"""Application configuration management."""
from pydantic import model_validator, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from functools import lru_cache
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.exc import ArgumentError
from typing import Annotated, Optional
import logging

SQLITE_LOCAL_URL = "sqlite+aiosqlite:///./awards.db"
DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = SQLITE_LOCAL_URL
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Application
    frontend_url: str = "http://localhost:5000"
    environment: str = "development"
    log_dir: str = "logs"
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_exp_minutes: int = 7 * 24 * 60  # Tokens valid for 7 days
    access_token_cookie_name: str = "awards_access_token"

    # Admin access
    admin_emails: Annotated[set[str], NoDecode] = set()

    # Email verification
    verification_code_ttl_minutes: int = 15
    email_api_url: str = "https://api.brevo.com/v3/smtp/email"
    email_api_key: str = ""  # Empty disables delivery; codes are logged instead
    email_from: str = "noreply@nhea.com"
    email_sender_name: str = "NHEA Awards"
    email_timeout_seconds: int = 10

    # Voting and event
    leaderboard_limit: int = 10
    max_rsvp_guests: int = 10
    vote_cast_max_attempts: int = 3
    vote_cast_retry_delay_seconds: float = 0.25

    @field_validator("admin_emails", mode="before")
    @classmethod
    def parse_admin_emails(cls, value):
        """Parse comma-separated admin emails from environment variables."""
        if value is None:
            return set()
        if isinstance(value, str):
            items = [item.strip().lower() for item in value.split(",") if item.strip()]
        elif isinstance(value, (list, tuple, set)):
            items = [str(item).strip().lower() for item in value if str(item).strip()]
        else:
            raise TypeError("admin_emails must be provided as a string or sequence")
        return set(items)

    def is_admin_email(self, email: str | None) -> bool:
        """Determine if the provided email belongs to an administrator."""
        if not email:
            return False
        return email.strip().lower() in self.admin_emails

    @model_validator(mode="after")
    def validate_all_config(self):
        """Validate security configuration and normalize Postgres URLs."""
        logger = logging.getLogger(__name__)

        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("secret_key must be changed from default value in production")

        if self.jwt_algorithm not in ["HS256", "HS384", "HS512"]:
            raise ValueError(f"Unsupported JWT algorithm: {self.jwt_algorithm}. Use HS256, HS384, or HS512.")

        if self.access_token_exp_minutes < 1 or self.access_token_exp_minutes > 30 * 24 * 60:
            raise ValueError("access_token_exp_minutes must be between 1 and 43200 (30 days)")

        if self.verification_code_ttl_minutes < 1:
            raise ValueError("verification_code_ttl_minutes must be at least 1 minute")

        if self.vote_cast_max_attempts < 1:
            raise ValueError("vote_cast_max_attempts must be at least 1")

        url = self.database_url
        if not url:
            logger.warning("Empty DATABASE_URL, using SQLite fallback")
            self.database_url = SQLITE_LOCAL_URL
            return self

        parsed: Optional[URL] = None
        try:
            parsed = make_url(url)
        except ArgumentError as e:
            logger.error(f"Failed to parse DATABASE_URL: {e}")
            self.database_url = SQLITE_LOCAL_URL
            return self

        drivername = parsed.drivername
        if drivername.startswith("postgres") and "+asyncpg" not in drivername:
            parsed = parsed.set(drivername="postgresql+asyncpg")
            logger.info(f"Driver normalized: {drivername} -> {parsed.drivername}")
        self.database_url = parsed.render_as_string(hide_password=False)

        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
