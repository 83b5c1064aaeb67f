"""Configuration management using pydantic-settings."""

from .settings import (
    ChainSettings,
    LoggingSettings,
    MatcherSettings,
    VerdictSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ChainSettings",
    "LoggingSettings",
    "MatcherSettings",
    "VerdictSettings",
    "clear_settings_cache",
    "get_settings",
]
