"""
Base configuration settings.

Fields shared by the whole backend process: deployment environment, log
level and the browser origins allowed to call the API. Every config module
inherits the .env loading rules from here.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Base configuration class with process-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment name, reported in the startup log",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware (JSON list in CORS_ORIGINS)",
    )
