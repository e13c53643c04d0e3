"""
S3 uploads bucket configuration.

Settings for attachment storage: bucket location, key prefix and size caps.

Dependencies: pydantic_settings
System role: Blob storage configuration for uploads and attachment resolution
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3UploadsSettings(BaseSettings):
    """Settings for S3 uploads bucket operations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_UPLOADS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="chat-backend-dev-uploads",
        description="S3 bucket for uploaded attachments",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    key_prefix: str = Field(
        default="uploads/",
        description="Key prefix under which uploads are stored",
    )
    max_upload_bytes: int = Field(
        default=1024 * 1024,
        gt=0,
        description="Maximum accepted upload size in bytes (1 MiB)",
    )
    attachment_max_bytes: int = Field(
        default=100_000,
        gt=0,
        description="Maximum bytes of an attachment injected into a prompt",
    )
