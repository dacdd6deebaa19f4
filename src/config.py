"""Configuration settings using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # qpdf
    qpdf_binary: str = Field(
        default="qpdf",
        description="Executable name or absolute path of the qpdf utility",
    )
    qpdf_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound on a single qpdf run before it is killed",
    )
    temp_dir: Optional[str] = Field(
        default=None,
        description="Parent directory for per-request work dirs (system temp if unset)",
    )

    # Requests
    max_body_bytes: int = Field(
        default=50 * 1024 * 1024,
        ge=1,
        description="Largest accepted request body, checked against Content-Length",
    )

    # Application
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
