"""
Database models package.

Exports:
  - MessageModel: Append-only chat message row
  - SessionMetaModel: Per-session key/value metadata row
  - CREATED_AT, UPDATED_AT, SUMMARY: Metadata keys

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Database model definitions for the session store
"""

from chat_backend.boundary.db.models.message_model import MESSAGE_ROLES, MessageModel
from chat_backend.boundary.db.models.meta_model import (
    CREATED_AT,
    SUMMARY,
    UPDATED_AT,
    SessionMetaModel,
)

__all__ = [
    "MESSAGE_ROLES",
    "MessageModel",
    "SessionMetaModel",
    "CREATED_AT",
    "UPDATED_AT",
    "SUMMARY",
]
