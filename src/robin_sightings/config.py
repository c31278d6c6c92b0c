"""
Application settings loaded from the environment.

Every field can be overridden with a ``ROBIN_``-prefixed environment variable
or a ``.env`` file, e.g. ``ROBIN_DATA_URL=https://example.org/sightings.json``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for fetching, caching and serving sightings."""

    model_config = SettingsConfigDict(
        env_prefix="ROBIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "robin-sightings"
    app_env: str = Field(default="dev", description="dev / stage / prod")
    debug: bool = False

    data_url: str = Field(
        default="http://localhost:8080/sightings.json",
        description="URL of the JSON sightings feed",
    )
    data_dir: Path = Field(default=Path("data"), description="Root of the data store")
    cache_ttl_hours: float = Field(default=6.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)

    api_port: int = Field(default=8000, ge=1, le=65535)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
