"""
Configuration management using Pydantic Settings.
Challenge: Centralized config, env validation, type safety.
Design: Single source of truth for storage location and UI-state policies.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Inventory"
    debug: bool = False

    # Local database (SQLite through aiosqlite)
    database_url: str = "sqlite+aiosqlite:///./inventory.db"

    # How long a shared UI state keeps its store subscription after the last observer leaves
    state_stop_timeout_ms: int = 5000

    # Users with quantity at or below this are flagged out of stock
    out_of_stock_threshold: int = 0

    # Used when the process locale defines no currency symbol
    currency_symbol: str = "$"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every view-model construction."""
    return Settings()
