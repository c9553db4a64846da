"""
Configuration and settings for the question board service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")

    # Replica endpoints (bare GET/PUT of the whole document)
    primary_store_url: Optional[str] = Field(default=None)
    backup_store_url: Optional[str] = Field(default=None)
    store_timeout_seconds: float = Field(default=10.0, gt=0)

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="ASKBOARD_USE_IN_MEMORY_BACKENDS"
    )

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
