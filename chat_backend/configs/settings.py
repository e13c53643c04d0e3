"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from chat_backend.configs.base import BaseSettings
from chat_backend.configs.chat import ChatSettings
from chat_backend.configs.database import DatabaseSettings
from chat_backend.configs.model import ModelSettings
from chat_backend.configs.s3_uploads import S3UploadsSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    model: ModelSettings = Field(default_factory=ModelSettings)
    s3_uploads: S3UploadsSettings = Field(default_factory=S3UploadsSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from chat_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
