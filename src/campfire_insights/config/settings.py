"""Configuration settings for Campfire Insights."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FlatSettings(BaseSettings):
    """Flat settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )

    # Burn rate windows
    burn_rate_default_months: int = Field(
        default=6, validation_alias="BURN_RATE_DEFAULT_MONTHS"
    )
    burn_rate_min_months: int = Field(default=3, validation_alias="BURN_RATE_MIN_MONTHS")

    # Rendering
    json_indent: int = Field(default=2, validation_alias="JSON_INDENT")


@lru_cache
def get_settings() -> FlatSettings:
    """Get cached settings instance."""
    return FlatSettings()
