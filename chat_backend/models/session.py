"""
Session domain models and schemas.

Messages and the full export record returned by the session store.
Field names serialize in camelCase to match the HTTP contract.

Dependencies: pydantic
System role: Session store data contracts
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MessageRole = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    """One immutable entry of a session's message log."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    timestamp: int = Field(description="Epoch milliseconds")


class SessionExport(BaseModel):
    """Full dump of one session: metadata plus every message, oldest first."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    created_at: int
    updated_at: int
    summary: str | None = None
    messages: list[ChatMessage] = Field(default_factory=list)
