"""
Chat message CRUD operations.

Append and ordered retrieval for the per-session message log.
Ordering is always ``(ts, id)`` so equal timestamps keep insertion order.

Dependencies: sqlalchemy, chat_backend.boundary.db.models
System role: Message log persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def append(
        self,
        session: AsyncSession,
        session_id: str,
        role: str,
        content: str,
        ts: int,
    ) -> MessageModel:
        """
        Append one message to the session log.

        Args:
            session: Async database session
            session_id: Session identity
            role: Message role
            content: Message text
            ts: Timestamp in epoch milliseconds

        Returns:
            MessageModel: Stored row with its insertion sequence
        """
        return await self.create(
            session,
            session_id=session_id,
            role=role,
            content=content,
            ts=ts,
        )

    async def get_recent(
        self,
        session: AsyncSession,
        session_id: str,
        limit: int,
    ) -> list[MessageModel]:
        """
        Retrieve the most recent messages in ascending order.

        Args:
            session: Async database session
            session_id: Session identity
            limit: Maximum number of messages (<= 0 returns nothing)

        Returns:
            list[MessageModel]: Up to ``limit`` newest messages, oldest first
        """
        if limit <= 0:
            return []
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.ts.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        rows = list(result.scalars().all())
        rows.reverse()
        return rows

    async def get_all(
        self,
        session: AsyncSession,
        session_id: str,
    ) -> Sequence[MessageModel]:
        """
        Retrieve the full log in ascending order.

        Args:
            session: Async database session
            session_id: Session identity

        Returns:
            Sequence[MessageModel]: Every message, oldest first
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.ts.asc(), MessageModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()
