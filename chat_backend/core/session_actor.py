"""
Per-session actor over the durable message store.

Each session identity maps to exactly one SessionActor while any caller
holds it. The actor runs its operations one at a time behind an
asyncio.Lock, and every operation is a single database transaction, so
concurrent callers on the same session observe linearizable mutations
while different sessions proceed independently.

A chat exchange spans several actor operations (append user message, read
context, append reply); the exchange as a whole is not atomic.

Dependencies: sqlalchemy, chat_backend.boundary.db
System role: Single-writer owner of one conversation's log and metadata
"""

import asyncio
import logging
import time
import weakref
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chat_backend.boundary.db.connection import SchemaInitializer
from chat_backend.boundary.db.CRUD import message_crud, session_meta_crud
from chat_backend.boundary.db.models import CREATED_AT, SUMMARY, UPDATED_AT
from chat_backend.core.exceptions import StorageUnavailableError
from chat_backend.models.session import ChatMessage, MessageRole, SessionExport

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class SessionActor:
    """
    Serialized access to one session's message log and metadata.

    Callers obtain instances from SessionActorRegistry; constructing two
    actors for the same session identity breaks the single-writer guarantee.
    """

    def __init__(
        self,
        session_id: str,
        session_factory: async_sessionmaker,
        schema: SchemaInitializer,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Initialize actor state. Storage is touched lazily on first use.

        Args:
            session_id: Session identity this actor owns
            session_factory: Async session factory for the store
            schema: Shared schema initializer
            clock: Millisecond clock used for createdAt/updatedAt seeding
        """
        self.session_id = session_id
        self._session_factory = session_factory
        self._schema = schema
        self._clock = clock
        self._lock = asyncio.Lock()
        self._initialized = False

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Run one operation in a transaction, mapping storage faults."""
        try:
            async with self._session_factory() as db:
                async with db.begin():
                    yield db
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                f"{__name__}:{operation} - Storage failure for session_id={self.session_id}: "
                f"{type(e).__name__}"
            )
            raise StorageUnavailableError(
                "Session storage unavailable",
                operation=operation,
            ) from e

    async def _touch(self, db: AsyncSession, ts: int) -> None:
        """Move updatedAt forward to ``ts``; never backwards."""
        current = await session_meta_crud.get_value(db, self.session_id, UPDATED_AT)
        updated_at = max(int(current), ts) if current is not None else ts
        await session_meta_crud.set_value(db, self.session_id, UPDATED_AT, str(updated_at))

    async def _ensure_initialized_locked(self) -> None:
        if self._initialized:
            return
        try:
            await self._schema.ensure()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"{__name__}:ensure_initialized - Schema creation failed: {type(e).__name__}")
            raise StorageUnavailableError(
                "Session storage unavailable",
                operation="ensure_initialized",
            ) from e

        async with self._transaction("ensure_initialized") as db:
            created_at = await session_meta_crud.get_value(db, self.session_id, CREATED_AT)
            if created_at is None:
                now = str(self._clock())
                await session_meta_crud.set_value(db, self.session_id, CREATED_AT, now)
                await session_meta_crud.set_value(db, self.session_id, UPDATED_AT, now)
                logger.info(f"{__name__}:ensure_initialized - New session session_id={self.session_id}")
        self._initialized = True

    async def ensure_initialized(self) -> None:
        """
        Create storage structures and seed createdAt/updatedAt if absent.

        Idempotent and cheap after the first call.

        Raises:
            StorageUnavailableError: If the store cannot be reached
        """
        async with self._lock:
            await self._ensure_initialized_locked()

    async def append_message(self, role: MessageRole, content: str, timestamp: int) -> ChatMessage:
        """
        Append one message at the end of the log.

        Content is stored as given; callers validate it.

        Args:
            role: user, assistant or system
            content: Message text
            timestamp: Epoch milliseconds

        Returns:
            ChatMessage: The stored message

        Raises:
            StorageUnavailableError: If the write fails (nothing is stored)
        """
        async with self._lock:
            await self._ensure_initialized_locked()
            async with self._transaction("append_message") as db:
                await message_crud.append(db, self.session_id, role, content, timestamp)
                await self._touch(db, timestamp)
        return ChatMessage(role=role, content=content, timestamp=timestamp)

    async def get_recent_messages(self, limit: int) -> list[ChatMessage]:
        """
        Return up to ``limit`` newest messages, oldest first.

        Args:
            limit: Window size; <= 0 yields an empty list

        Returns:
            list[ChatMessage]: Selected messages in ascending order
        """
        async with self._lock:
            await self._ensure_initialized_locked()
            if limit <= 0:
                return []
            async with self._transaction("get_recent_messages") as db:
                rows = await message_crud.get_recent(db, self.session_id, limit)
        return [ChatMessage(role=row.role, content=row.content, timestamp=row.ts) for row in rows]

    async def set_summary(self, summary: str) -> None:
        """
        Overwrite the stored summary.

        Args:
            summary: New summary text
        """
        async with self._lock:
            await self._ensure_initialized_locked()
            async with self._transaction("set_summary") as db:
                await session_meta_crud.set_value(db, self.session_id, SUMMARY, summary)
                await self._touch(db, self._clock())

    async def get_summary(self) -> str | None:
        """
        Return the current summary.

        Returns:
            str | None: Summary text, None if never summarized
        """
        async with self._lock:
            await self._ensure_initialized_locked()
            async with self._transaction("get_summary") as db:
                return await session_meta_crud.get_value(db, self.session_id, SUMMARY)

    async def export_session(self) -> SessionExport:
        """
        Return metadata and the full message log.

        Returns the whole log with no window.

        Returns:
            SessionExport: createdAt, updatedAt, summary and every message ascending
        """
        async with self._lock:
            await self._ensure_initialized_locked()
            async with self._transaction("export_session") as db:
                meta = await session_meta_crud.get_all(db, self.session_id)
                rows = await message_crud.get_all(db, self.session_id)

        return SessionExport(
            session_id=self.session_id,
            created_at=int(meta.get(CREATED_AT, 0)),
            updated_at=int(meta.get(UPDATED_AT, 0)),
            summary=meta.get(SUMMARY),
            messages=[
                ChatMessage(role=row.role, content=row.content, timestamp=row.ts)
                for row in rows
            ],
        )


class SessionActorRegistry:
    """
    Maps session identities to their single SessionActor.

    Lookup is synchronous, so two coroutines asking for the same identity
    on one event loop always receive the same instance. Entries are weak:
    an actor stays registered while some coroutine holds it and is dropped
    once the last reference goes away. State lives in the database, so a
    rebuilt actor only repeats the schema check.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        schema: SchemaInitializer,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._session_factory = session_factory
        self._schema = schema
        self._clock = clock
        self._actors: weakref.WeakValueDictionary[str, SessionActor] = weakref.WeakValueDictionary()

    def get(self, session_id: str) -> SessionActor:
        """
        Return the actor owning ``session_id``, creating it on first access.

        Args:
            session_id: Session identity

        Returns:
            SessionActor: The one actor for this identity
        """
        actor = self._actors.get(session_id)
        if actor is None:
            actor = SessionActor(
                session_id,
                self._session_factory,
                self._schema,
                clock=self._clock,
            )
            self._actors[session_id] = actor
        return actor

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._actors

    def __len__(self) -> int:
        return len(self._actors)
