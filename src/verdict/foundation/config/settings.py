"""Environment-based configuration using pydantic-settings.

Example:
    >>> from verdict.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # VERDICT_LOG_LEVEL=DEBUG
    # VERDICT_CHAIN_LOG_STEPS=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VERDICT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors on/off (None = detect tty)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ChainSettings(BaseSettings):
    """Chain runner configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VERDICT_CHAIN_",
        extra="ignore",
    )

    log_steps: bool = Field(default=False, description="Emit a debug event for every executed step")


class MatcherSettings(BaseSettings):
    """Pattern matcher configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VERDICT_MATCH_",
        extra="ignore",
    )

    log_misses: bool = Field(default=True, description="Emit a debug event before raising NoMatchError")


class VerdictSettings(BaseSettings):
    """Root settings for verdict.

    Loads configuration from environment variables with VERDICT_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        VERDICT_DEBUG=true
        VERDICT_LOG_LEVEL=DEBUG
        VERDICT_LOG_FORMAT=json
        VERDICT_CHAIN_LOG_STEPS=true
        VERDICT_MATCH_LOG_MISSES=false
    """

    model_config = SettingsConfigDict(
        env_prefix="VERDICT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode (forces DEBUG log level)")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    matcher: MatcherSettings = Field(default_factory=MatcherSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug override."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> VerdictSettings:
    """Get the global settings instance (cached)."""
    return VerdictSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
