"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables. Every variable carries the ``NOTIGRAM_`` prefix.

Architecture:
- Flat Settings structure (no nesting)
- Config loaded from environment variables, defaults for everything
- Type validation via Pydantic
- Per-visitor options (bot token, chat id, fields) are NOT settings; they are
  passed to each notifier as NotigramOptions

Usage:
    from notigram.core.config import get_settings

    settings = get_settings()
    timeout = settings.request_timeout

    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notigram.core.constants import (
    BOT_API_BASE_URL_DEFAULT,
    GEO_LOOKUP_URL_DEFAULT,
    IP_LOOKUP_URL_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
)
from notigram.core.enums import Environment


class Settings(BaseSettings):
    """
    Notifier settings (flat structure).

    Configuration precedence:
        1. Environment variables (NOTIGRAM_*)
        2. Default values

    Returns:
        Settings: Configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Remote services
    ip_lookup_url: str = Field(
        default=IP_LOOKUP_URL_DEFAULT,
        description="Public IP resolution endpoint (returns {'ip': ...})",
    )
    geo_lookup_url: str = Field(
        default=GEO_LOOKUP_URL_DEFAULT,
        description="Geolocation-by-IP endpoint base URL",
    )
    bot_api_base_url: str = Field(
        default=BOT_API_BASE_URL_DEFAULT,
        description="Telegram Bot API base URL",
    )
    request_timeout: float = Field(
        default=REQUEST_TIMEOUT_DEFAULT,
        description="Timeout for each remote call in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTIGRAM_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """
        Validate the remote call timeout is positive.

        Args:
            v: Timeout in seconds.

        Returns:
            float: Validated timeout.

        Raises:
            ValueError: If timeout is zero or negative.
        """
        if v <= 0:
            raise ValueError("request_timeout must be greater than 0")
        return v

    @field_validator("ip_lookup_url", "geo_lookup_url", "bot_api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log_level: {v}")
        return level

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def uses_json_logs(self) -> bool:
        """Whether logs should be rendered as JSON (everything but development)."""
        return self.environment != Environment.DEVELOPMENT


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
