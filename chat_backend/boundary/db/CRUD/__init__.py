"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from chat_backend.boundary.db.CRUD import message_crud, session_meta_crud

    # Use singleton instances
    recent = await message_crud.get_recent(db, session_id, limit=10)
"""

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from chat_backend.boundary.db.CRUD.meta_crud import SessionMetaCRUD, session_meta_crud

__all__ = [
    "BaseCRUD",
    "MessageCRUD",
    "message_crud",
    "SessionMetaCRUD",
    "session_meta_crud",
]
