"""
Configuration for the POS adapter layer.

Vendor endpoints, the pinned Square API version and HTTP client limits are
read from environment variables (or a local .env file) so that sandbox and
production deployments differ only in configuration.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """POS integration settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Square
    SQUARE_API_VERSION: str = Field(
        default="2024-06-04", description="Pinned Square-Version header"
    )
    SQUARE_PRODUCTION_BASE_URL: str = Field(
        default="https://connect.squareup.com",
        description="Square production API host",
    )
    SQUARE_SANDBOX_BASE_URL: str = Field(
        default="https://connect.squareupsandbox.com",
        description="Square sandbox API host",
    )

    # Clover
    CLOVER_BASE_URL: str = Field(
        default="https://api.clover.com/v3", description="Clover REST API root"
    )

    # HTTP client
    POS_HTTP_TIMEOUT_SECONDS: Optional[float] = Field(
        default=30.0,
        description="Per-request timeout for vendor calls (unset disables it)",
    )

    # Adapters
    POS_ENABLE_PREVIEW_ADAPTERS: bool = Field(
        default=False,
        description="Register the placeholder Toast and Clover adapters",
    )

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name"""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("POS_HTTP_TIMEOUT_SECONDS", mode="after")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("POS_HTTP_TIMEOUT_SECONDS must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get POS settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()
