"""Configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from upstage_adapter.constants import DEFAULT_BASE_URL, DEFAULT_VALUES


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server port")
    log_level: str = Field(default="info", description="Logging level")

    # Upstage API settings
    upstage_api_key: str = Field(default="", description="Upstage API bearer token")
    upstage_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Upstage API base URL",
    )
    request_timeout_ms: int = Field(
        default=DEFAULT_VALUES["request_timeout_ms"],
        gt=0,
        description="Per-call HTTP timeout in milliseconds",
    )

    # Item processing
    continue_on_fail: bool = Field(
        default=False,
        description="Record per-item failures instead of aborting the run",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
