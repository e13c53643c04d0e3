"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base: Declarative base
  - get_async_engine(), get_async_session_factory(), SchemaInitializer: Connection management
  - MessageModel, SessionMetaModel: Session store tables
  - message_crud, session_meta_crud: CRUD operation singletons

Dependencies: sqlalchemy, chat_backend.configs
System role: Durable storage for per-session message logs and metadata.
"""

from chat_backend.boundary.db.base import Base
from chat_backend.boundary.db.connection import (
    SchemaInitializer,
    get_async_engine,
    get_async_session_factory,
)
from chat_backend.boundary.db.models import MessageModel, SessionMetaModel
from chat_backend.boundary.db.CRUD import (
    BaseCRUD,
    MessageCRUD,
    SessionMetaCRUD,
    message_crud,
    session_meta_crud,
)

__all__ = [
    "Base",
    "SchemaInitializer",
    "get_async_engine",
    "get_async_session_factory",
    "MessageModel",
    "SessionMetaModel",
    "BaseCRUD",
    "MessageCRUD",
    "SessionMetaCRUD",
    "message_crud",
    "session_meta_crud",
]
