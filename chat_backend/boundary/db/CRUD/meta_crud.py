"""
Session metadata CRUD operations.

Key/value reads and upserts scoped to one session.

Dependencies: sqlalchemy, chat_backend.boundary.db.models
System role: Session metadata persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.models.meta_model import SessionMetaModel


class SessionMetaCRUD(BaseCRUD[SessionMetaModel]):
    """CRUD operations for SessionMetaModel."""

    def __init__(self) -> None:
        """Initialize SessionMetaCRUD with SessionMetaModel."""
        super().__init__(SessionMetaModel)

    async def get_value(self, session: AsyncSession, session_id: str, key: str) -> str | None:
        """
        Read one metadata value.

        Args:
            session: Async database session
            session_id: Session identity
            key: Metadata key

        Returns:
            str | None: Stored value, None if the key was never set
        """
        stmt = select(SessionMetaModel.value).where(
            SessionMetaModel.session_id == session_id,
            SessionMetaModel.key == key,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, session: AsyncSession, session_id: str) -> dict[str, str]:
        """
        Read every metadata entry of a session.

        Args:
            session: Async database session
            session_id: Session identity

        Returns:
            dict[str, str]: key -> value
        """
        stmt = select(SessionMetaModel.key, SessionMetaModel.value).where(
            SessionMetaModel.session_id == session_id
        )
        result = await session.execute(stmt)
        return {key: value for key, value in result.all()}

    async def set_value(self, session: AsyncSession, session_id: str, key: str, value: str) -> None:
        """
        Insert or overwrite one metadata value.

        Args:
            session: Async database session
            session_id: Session identity
            key: Metadata key
            value: New value
        """
        await session.merge(SessionMetaModel(session_id=session_id, key=key, value=value))
        await session.flush()


session_meta_crud = SessionMetaCRUD()
