"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. Nested settings are frozen after
initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.music.services import AutoplayDomainService
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import AutoplayAttempts, HistoryLimit


class DispatcherSettings(BaseModel):
    """Per-session dispatcher configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    search_engine: str = Field(
        default="ytsearch",
        min_length=1,
        validation_alias=AliasChoices("search_engine", "search_prefix"),
    )
    history_limit: HistoryLimit = 100
    autoplay_max_attempts: AutoplayAttempts = Field(
        default=AutoplayDomainService.DEFAULT_MAX_ATTEMPTS,
        validation_alias=AliasChoices("autoplay_max_attempts", "autoplay_attempts"),
    )

    @field_validator("search_engine")
    @classmethod
    def validate_search_engine(cls, v: str) -> str:
        """The prefix is joined to the query with ':' so it cannot contain one."""
        if ":" in v:
            raise ValueError(ErrorMessages.INVALID_SEARCH_ENGINE)
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISPATCHER__SEARCH_ENGINE, DISPATCHER__HISTORY_LIMIT,
      DISPATCHER__AUTOPLAY_MAX_ATTEMPTS (nested with prefix)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    dispatcher: DispatcherSettings = Field(default_factory=DispatcherSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
