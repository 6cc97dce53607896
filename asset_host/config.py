"""
Configuration management for the Asset Host server.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    PROJECT_NAME: str = "Asset Host"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Storage root; holds the worlds/ and avatars/ collection directories
    DATA_ROOT: str = "./data"

    # Public URLs are served through an HTTPS reverse proxy
    PUBLIC_BASE_URL: str = "https://files.soulsgames.com"

    # Upload limits
    MAX_UPLOAD_SIZE: int = 500 * 1024 * 1024  # 500MB

    # Fail the whole listing on a malformed sidecar instead of skipping it
    STRICT_LISTING: bool = False

    # Surface internal error messages in 500 responses
    EXPOSE_ERROR_DETAILS: bool = True

    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("PUBLIC_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
