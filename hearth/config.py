"""
Configuration and settings for the Hearth backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Postgres expected)
    database_url: Optional[str] = Field(
        default=None, validation_alias="DATABASE_URL"
    )

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="HEARTH_USE_IN_MEMORY_BACKENDS"
    )

    # Milestones
    upcoming_window_days: int = Field(
        default=30, ge=1, validation_alias="HEARTH_UPCOMING_WINDOW_DAYS"
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
