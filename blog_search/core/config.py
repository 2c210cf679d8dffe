# blog_search/core/config.py
import logging
import os
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    MAX_PAGE_SIZE,
    SUGGESTION_LIMIT_PER_TYPE,
    SUGGESTION_MIN_CHARS,
)

logger = logging.getLogger(__name__)

_DEFAULT_SECRET_KEY = SecretStr("dev-only-secret-key-change-me")


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


class Settings(BaseSettings):
    environment: Literal["development", "staging", "production", "test"] = "development"

    # Database
    database_url: str = Field(
        default="sqlite:///./blog_search.db",
        description="SQLAlchemy URL for the blog store (PostgreSQL in production)",
    )
    database_echo: bool = False

    # Auth (tokens are issued elsewhere; we only decode them)
    secret_key: SecretStr = Field(
        default=_DEFAULT_SECRET_KEY,
        description="Secret key used to verify JWT access tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Celery / Redis
    redis_url: str = "redis://localhost:6379"

    # Search
    search_max_page_size: int = Field(default=MAX_PAGE_SIZE, ge=1)
    search_strict_sort: bool = Field(
        default=False,
        description="Reject unknown sort tokens with 400 instead of falling back to 'recent'",
    )

    # Autocomplete
    search_suggestion_min_chars: int = Field(default=SUGGESTION_MIN_CHARS, ge=1)
    search_suggestion_limit: int = Field(default=SUGGESTION_LIMIT_PER_TYPE, ge=1)
    search_suggestion_timeout_s: float = Field(
        default=2.0,
        gt=0,
        description="Upper bound for each suggestion group lookup",
    )

    # Search history retention
    search_history_max_per_user: int = (
        1000  # Maximum searches to keep per user (set to 0 to disable limit)
    )
    search_history_retention_days: int = (
        0  # Purge records older than this many days (set to 0 to disable)
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("search_history_max_per_user", "search_history_retention_days")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0 (0 disables)")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_database_url(self) -> str:
        """Return the database URL, never logging credentials."""
        url = self.database_url
        if self.is_production and url.startswith("sqlite"):
            logger.warning("SQLite configured in production; set DATABASE_URL to a server database")
        return url


settings = Settings()
