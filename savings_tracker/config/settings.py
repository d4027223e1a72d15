"""
Configuration Management for the Savings Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the tracker reads environment variables directly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from SAVINGS_TRACKER_* environment variables
    and the .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAVINGS_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Persistence
    store_path: Path = Field(
        default=Path(".savings_tracker.json"),
        description="JSON file backing the local key-value store"
    )

    # Periodic updates
    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        le=60,
        description="Seconds between display refreshes"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        min_length=1,
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )

    @field_validator('store_path')
    @classmethod
    def expand_store_path(cls, v: Path) -> Path:
        """Allow ~ in the configured path."""
        return v.expanduser()


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
