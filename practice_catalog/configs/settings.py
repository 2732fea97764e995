"""Centralized runtime settings for the practice catalog."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Catalog settings powered by pydantic-settings.

    Values come from ``CATALOG_``-prefixed environment variables and an
    optional ``.env`` file at the project root.
    """

    # -------------------------------------------------------------------------
    # UI
    # -------------------------------------------------------------------------
    LOCALE: str = "hu"
    QUICK_CATEGORY_LIMIT: int = Field(default=24, ge=0)

    # -------------------------------------------------------------------------
    # CLASSIFICATION
    # -------------------------------------------------------------------------
    SHORT_MAX_MINUTES: int = Field(default=10, ge=0)
    KPI_LIMIT: int = Field(default=4, ge=0)

    # -------------------------------------------------------------------------
    # CACHING
    # -------------------------------------------------------------------------
    INDEX_CACHE_SIZE: int = Field(default=8, ge=1)

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached catalog settings.

    Returns
    -------
    Settings
        The singleton settings instance.
    """
    return Settings()
