"""
Session metadata ORM model.

Small key/value store per session holding createdAt, updatedAt and summary.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Session metadata persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_backend.boundary.db.base import Base

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"
SUMMARY = "summary"


class SessionMetaModel(Base):
    """
    Key/value metadata row scoped to one session.

    Attributes:
        session_id: Owning session identity
        key: Metadata key (createdAt, updatedAt, summary)
        value: Metadata value stored as text
    """

    __tablename__ = "session_meta"

    session_id: Mapped[str] = mapped_column(String, primary_key=True)
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
