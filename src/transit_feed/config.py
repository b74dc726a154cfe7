"""Library configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loader settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    loader_log_level: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GTFS_LOG_LEVEL"),
    )

    # Parsing
    strict: bool = Field(
        default=True,
        validation_alias=AliasChoices("GTFS_STRICT", "STRICT"),
    )
    require_columns: bool = Field(
        default=False,
        validation_alias=AliasChoices("GTFS_REQUIRE_COLUMNS"),
    )
    skip_invalid_files: bool = Field(
        default=False,
        validation_alias=AliasChoices("GTFS_SKIP_INVALID_FILES"),
    )
    file_encoding: str = Field(
        default="utf-8-sig",
        validation_alias=AliasChoices("GTFS_FILE_ENCODING"),
    )

    # Archive fetching
    fetch_timeout_sec: int = Field(
        default=120,
        ge=1,
        validation_alias=AliasChoices("GTFS_FETCH_TIMEOUT_SEC"),
    )
    fetch_max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        validation_alias=AliasChoices("GTFS_FETCH_MAX_RETRIES"),
    )
    fetch_backoff_base: float = Field(
        default=2.0,
        validation_alias=AliasChoices("GTFS_FETCH_BACKOFF_BASE"),
    )
    fetch_max_bytes: int = Field(
        default=512 * 1024 * 1024,
        ge=1,
        validation_alias=AliasChoices("GTFS_FETCH_MAX_BYTES"),
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
