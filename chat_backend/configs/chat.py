"""
Chat orchestration settings.

Validation bounds, history windows, rate limits and prompts used by the
chat, summarize and export flows.

Dependencies: pydantic_settings
System role: Request orchestrator configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful, concise assistant. Ask clarifying questions when necessary. "
    "Do not output secrets or unsafe instructions."
)
DEFAULT_SUMMARIZE_PROMPT = (
    "Summarize the conversation in 5 bullet points focusing on user goals, "
    "constraints, and decisions. Keep under 120 words."
)


class ChatSettings(BaseSettings):
    """Settings for the chat request orchestrator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    session_id_min_length: int = Field(default=8, ge=1, description="Minimum trimmed sessionId length")
    message_max_length: int = Field(default=2000, ge=1, description="Maximum trimmed message length")
    history_limit: int = Field(default=10, ge=0, description="Messages of history sent with each chat turn")
    summarize_limit: int = Field(default=50, ge=0, description="Messages included in a summary transcript")
    rate_limit_requests: int = Field(default=10, ge=1, description="Requests allowed per window and session")
    rate_limit_window_ms: int = Field(default=60_000, ge=1, description="Sliding window length in milliseconds")
    rate_limit_export: bool = Field(default=False, description="Apply the rate limiter to export requests")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT, description="Base system prompt for chat")
    summarize_prompt: str = Field(default=DEFAULT_SUMMARIZE_PROMPT, description="Instruction for summaries")
