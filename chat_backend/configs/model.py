"""
Model client settings.

Selects the LangChain chat model provider and bounds each inference call.

Dependencies: pydantic_settings
System role: Language model configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseSettings):
    """Settings for the text-generation model."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MODEL_",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    provider: Literal["bedrock", "google_genai"] = Field(
        default="bedrock",
        description="Chat model provider",
    )
    model_id: str = Field(
        default="meta.llama3-1-8b-instruct-v1:0",
        description="Provider model identifier",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, gt=0)
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for a single generation call",
    )
