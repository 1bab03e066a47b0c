# backend/goldfolio/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- TIMEZONE: IANA timezone for calendar-day boundaries (default: system local)
- MAX_CHART_POINTS: Default downsampling bound for charts
- LOG_LEVEL / LOG_FORMAT: Logging setup

Configuration is validated on application startup. Invalid configuration
will raise a ValueError with a descriptive message.

Usage:
    from goldfolio.config import settings

    service = PortfolioCurveService(tz=settings.tzinfo)
"""
from datetime import tzinfo as TzInfo
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Find the .env file in project root (parent of backend/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - APP_NAME: Application name (default: "Goldfolio Portfolio Curve API")
        - DEBUG: Enable debug mode (default: False)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")

    Curve Settings (optional, with sensible defaults):
        - TIMEZONE: IANA name such as "Europe/Zurich" (default: system local)
        - MAX_CHART_POINTS: Points kept after downsampling (default: 100)
        - CURRENCY: Currency used for formatted labels (default: "CHF")
    """

    # Environment mode
    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format (text for humans, json for aggregation)"
    )

    # Optional - safe defaults
    app_name: str = "Goldfolio Portfolio Curve API"
    debug: bool = False

    # =========================================================================
    # CURVE
    # =========================================================================
    timezone: str | None = Field(
        default=None,
        description="IANA timezone for calendar-day boundaries (unset = system local)"
    )
    max_chart_points: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum chart points before downsampling"
    )
    currency: str = Field(
        default="CHF",
        min_length=3,
        max_length=3,
        description="Display currency for formatted labels"
    )

    # =========================================================================
    # CORS
    # =========================================================================
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Allowed CORS origins (JSON list in env var)"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"],
        description="Allowed HTTP methods for CORS"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        description="Allowed HTTP headers for CORS"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_timezone(self) -> "Settings":
        """
        Validate the configured timezone.

        An empty string is treated as unset (system local time).
        """
        if not self.timezone:
            object.__setattr__(self, "timezone", None)
            return self

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"Unknown TIMEZONE: '{self.timezone}'. "
                "Use an IANA timezone name such as 'Europe/Zurich' or 'UTC', "
                "or leave TIMEZONE unset to use the system local time."
            ) from e

        return self

    @property
    def tzinfo(self) -> TzInfo | None:
        """Get the configured timezone, or None for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


# Create single instance
settings = Settings()
