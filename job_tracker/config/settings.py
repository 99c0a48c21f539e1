# =============================================================================
# Application Settings
# =============================================================================
"""
Runtime configuration for the Job Application Tracker.

Values come from environment variables (or a local `.env` file) and are
validated once at startup.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """
    Tracker settings; each field maps to the upper-case environment
    variable of the same name (e.g. `SCRAPER_TIMEOUT=5`).

    Attributes:
        app_name: Name used in log lines.
        app_env: Deployment environment reported by /health.
        debug: Expose API docs and error details.
        log_level: Root logging level.
        api_host: Interface uvicorn binds to.
        api_port: Port uvicorn listens on.
        database_url: SQLAlchemy async URL of the application database.
        database_echo: Log every SQL statement.
        scraper_timeout: Overall deadline in seconds for one job page fetch.
        scraper_user_agent: User agent sent when fetching job pages.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="job-tracker",
        description="Name used in log lines"
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment"
    )
    debug: bool = Field(
        default=True,
        description="Expose API docs and error details"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level"
    )

    # -------------------------------------------------------------------------
    # API Settings
    # -------------------------------------------------------------------------
    api_host: str = Field(
        default="127.0.0.1",
        description="Interface the API binds to"
    )
    api_port: int = Field(
        default=8000,
        description="Port the API listens on"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./jobs.db",
        description="SQLAlchemy async database URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Log all SQL statements"
    )

    # -------------------------------------------------------------------------
    # Scraper Settings
    # -------------------------------------------------------------------------
    scraper_timeout: float = Field(
        default=10.0,
        description="Overall deadline in seconds for fetching a job page"
    )
    scraper_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent string sent with job page requests"
    )

    # -------------------------------------------------------------------------
    # Model Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("scraper_timeout")
    @classmethod
    def validate_scraper_timeout(cls, v: float) -> float:
        """
        Validate that the scraper deadline is positive.

        Args:
            v: The timeout value in seconds.

        Returns:
            The validated timeout.

        Raises:
            ValueError: If the timeout is zero or negative.
        """
        if v <= 0:
            raise ValueError("scraper_timeout must be greater than zero")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Require an async SQLAlchemy dialect prefix."""
        if "://" not in v:
            raise ValueError("database_url must be a SQLAlchemy URL")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Settings read from the environment on first use and reused afterwards.

    Returns:
        The process-wide Settings instance.
    """
    return Settings()
