"""
Chat message ORM model.

One row per appended message. The autoincrement primary key is the
insertion sequence that breaks ties between equal timestamps, so
``(ts, id)`` is a strict total order within a session.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Append-only message log persistence
"""

from sqlalchemy import BigInteger, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_backend.boundary.db.base import Base

MESSAGE_ROLES = ("user", "assistant", "system")


class MessageModel(Base):
    """
    Message ORM model for a session's append-only log.

    Attributes:
        id: Insertion sequence (autoincrement primary key)
        session_id: Owning session identity
        role: user, assistant or system
        content: Message text as submitted
        ts: Message timestamp in epoch milliseconds
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        CheckConstraint(
            "role IN (" + ", ".join(f"'{role}'" for role in MESSAGE_ROLES) + ")",
            name="ck_chat_messages_role",
        ),
        Index("ix_chat_messages_session_ts", "session_id", "ts", "id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    ts: Mapped[int] = mapped_column(BigInteger, nullable=False)
