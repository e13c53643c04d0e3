"""
Database configuration settings.

Manages the SQLAlchemy async URL backing the per-session message store.
Defaults to a local SQLite file through aiosqlite; any async dialect works.

Dependencies: pydantic, pydantic_settings
System role: Session store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chat_backend.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Session store database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SESSION_DB_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./chat_sessions.db",
        description="SQLAlchemy async database URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
