"""
Chat domain models and schemas.

Request/response schemas for the chat and summarize flows, plus the
role/content pairs handed to the model client.

Request fields are lenient: a missing or non-string value
becomes an empty string (or None for ``fileId``) and is rejected later by
the orchestrator's validation with a proper error envelope.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chat_backend.models.session import MessageRole


def _text_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    session_id: str = Field(default="", alias="sessionId", description="Session identity")
    message: str = Field(default="", description="User message")
    file_id: str | None = Field(default=None, alias="fileId", description="Optional attachment id")

    @field_validator("session_id", "message", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)

    @field_validator("file_id", mode="before")
    @classmethod
    def _coerce_file_id(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class SummarizeRequest(BaseModel):
    """Request schema for summarization."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    session_id: str = Field(default="", alias="sessionId", description="Session identity")

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    reply: str


class SummarizeResponse(BaseModel):
    """Response schema for summarization."""

    summary: str


class PromptMessage(BaseModel):
    """One role/content pair sent to the model."""

    role: MessageRole
    content: str
