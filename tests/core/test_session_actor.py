"""
Test suite for SessionActor and SessionActorRegistry.

Runs against an in-memory SQLite store. Covers append/window ordering,
summary overwrite, export metadata, lazy initialization, registry identity
and storage failure mapping.

System role: Verification of the per-session single-writer store
"""

import asyncio
import gc
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from chat_backend.core.exceptions import StorageUnavailableError
from chat_backend.core.session_actor import SessionActor, SessionActorRegistry
from chat_backend.models.session import ChatMessage

SESSION_ID = "session-actor-01"


def _storage_fault() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("disk I/O error"))


class TestSessionActorAppend:
    """Test suite for append_message and get_recent_messages."""

    @pytest.mark.asyncio
    async def test_recent_should_return_user_and_assistant_pair(
        self, registry: SessionActorRegistry
    ) -> None:
        """Test a fresh session returns exactly the two appended messages."""
        # Arrange
        actor = registry.get(SESSION_ID)

        # Act
        await actor.append_message("user", "Hello", 1000)
        await actor.append_message("assistant", "Hi", 1001)
        recent = await actor.get_recent_messages(10)

        # Assert
        assert recent == [
            ChatMessage(role="user", content="Hello", timestamp=1000),
            ChatMessage(role="assistant", content="Hi", timestamp=1001),
        ]

    @pytest.mark.asyncio
    async def test_append_should_return_stored_message(self, registry: SessionActorRegistry) -> None:
        """Test append echoes the stored message."""
        # Act
        message = await registry.get(SESSION_ID).append_message("user", "Hello", 1000)

        # Assert
        assert message == ChatMessage(role="user", content="Hello", timestamp=1000)

    @pytest.mark.asyncio
    async def test_recent_should_return_newest_window_ascending(
        self, registry: SessionActorRegistry
    ) -> None:
        """Test the window holds the last N messages, oldest first."""
        # Arrange
        actor = registry.get(SESSION_ID)
        for i in range(15):
            await actor.append_message("user", f"m{i}", 1000 + i)

        # Act
        recent = await actor.get_recent_messages(4)

        # Assert
        assert [m.content for m in recent] == ["m11", "m12", "m13", "m14"]

    @pytest.mark.asyncio
    async def test_recent_should_be_stable_without_appends(self, registry: SessionActorRegistry) -> None:
        """Test repeated reads return identical windows."""
        # Arrange
        actor = registry.get(SESSION_ID)
        for i in range(3):
            await actor.append_message("user", f"m{i}", 1000 + i)

        # Act
        first = await actor.get_recent_messages(10)
        second = await actor.get_recent_messages(10)

        # Assert
        assert first == second
        assert len(first) == 3

    @pytest.mark.asyncio
    async def test_recent_should_order_equal_timestamps_by_insertion(
        self, registry: SessionActorRegistry
    ) -> None:
        """Test ties on timestamp keep append order."""
        # Arrange
        actor = registry.get(SESSION_ID)
        for content in ("first", "second", "third"):
            await actor.append_message("user", content, 5000)

        # Act
        recent = await actor.get_recent_messages(2)
        exported = await actor.export_session()

        # Assert
        assert [m.content for m in recent] == ["second", "third"]
        assert [m.content for m in exported.messages] == ["first", "second", "third"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -3])
    async def test_recent_should_be_empty_for_non_positive_limit(
        self, registry: SessionActorRegistry, limit: int
    ) -> None:
        """Test limit <= 0 yields an empty window."""
        # Arrange
        actor = registry.get(SESSION_ID)
        await actor.append_message("user", "Hello", 1000)

        # Act
        recent = await actor.get_recent_messages(limit)

        # Assert
        assert recent == []

    @pytest.mark.asyncio
    async def test_append_should_serialize_concurrent_writers(self, registry: SessionActorRegistry) -> None:
        """Test concurrent appends on one session are all stored."""
        # Arrange
        actor = registry.get(SESSION_ID)

        # Act
        await asyncio.gather(
            *(actor.append_message("user", f"m{i}", 1000 + i) for i in range(20))
        )
        exported = await actor.export_session()

        # Assert
        assert len(exported.messages) == 20
        assert [m.timestamp for m in exported.messages] == sorted(m.timestamp for m in exported.messages)

    @pytest.mark.asyncio
    async def test_sessions_should_not_share_messages(self, registry: SessionActorRegistry) -> None:
        """Test different session identities are isolated."""
        # Arrange
        await registry.get("session-aaaa").append_message("user", "A", 1000)
        await registry.get("session-bbbb").append_message("user", "B", 1000)

        # Act
        recent = await registry.get("session-aaaa").get_recent_messages(10)

        # Assert
        assert [m.content for m in recent] == ["A"]


class TestSessionActorSummary:
    """Test suite for set_summary and get_summary."""

    @pytest.mark.asyncio
    async def test_get_summary_should_be_none_before_first_summary(
        self, registry: SessionActorRegistry
    ) -> None:
        """Test a new session has no summary."""
        assert await registry.get(SESSION_ID).get_summary() is None

    @pytest.mark.asyncio
    async def test_set_summary_should_overwrite_previous(self, registry: SessionActorRegistry) -> None:
        """Test the last written summary wins."""
        # Arrange
        actor = registry.get(SESSION_ID)

        # Act
        await actor.set_summary("X")
        await actor.set_summary("Y")

        # Assert
        assert await actor.get_summary() == "Y"


class TestSessionActorExport:
    """Test suite for export_session metadata."""

    @pytest.mark.asyncio
    async def test_export_should_seed_metadata_for_new_session(
        self, registry: SessionActorRegistry, clock
    ) -> None:
        """Test an unknown session exports empty with createdAt == updatedAt == now."""
        # Arrange
        clock.now = 4242

        # Act
        exported = await registry.get(SESSION_ID).export_session()

        # Assert
        assert exported.session_id == SESSION_ID
        assert exported.created_at == 4242
        assert exported.updated_at == 4242
        assert exported.summary is None
        assert exported.messages == []

    @pytest.mark.asyncio
    async def test_export_should_track_latest_mutation_time(
        self, registry: SessionActorRegistry, clock
    ) -> None:
        """Test updatedAt follows the latest append or summary and never goes back."""
        # Arrange
        clock.now = 500
        actor = registry.get(SESSION_ID)
        await actor.append_message("user", "Hello", 1000)
        await actor.append_message("assistant", "Hi", 1001)
        clock.now = 2000
        await actor.set_summary("greeting")

        # Act
        await actor.append_message("user", "late clock", 1500)
        exported = await actor.export_session()

        # Assert
        assert exported.created_at == 500
        assert exported.updated_at == 2000
        assert exported.summary == "greeting"
        assert len(exported.messages) == 3

    @pytest.mark.asyncio
    async def test_export_should_serialize_camel_case(self, registry: SessionActorRegistry) -> None:
        """Test export record uses the wire field names."""
        # Arrange
        actor = registry.get(SESSION_ID)
        await actor.append_message("user", "Hello", 1000)

        # Act
        payload = (await actor.export_session()).model_dump(by_alias=True)

        # Assert
        assert set(payload) == {"sessionId", "createdAt", "updatedAt", "summary", "messages"}
        assert payload["messages"] == [{"role": "user", "content": "Hello", "timestamp": 1000}]


class TestSessionActorInitialization:
    """Test suite for ensure_initialized."""

    @pytest.mark.asyncio
    async def test_ensure_initialized_should_be_idempotent(
        self, registry: SessionActorRegistry, schema, clock
    ) -> None:
        """Test repeated initialization keeps the original createdAt."""
        # Arrange
        actor = registry.get(SESSION_ID)
        clock.now = 100
        await actor.ensure_initialized()

        # Act
        clock.now = 900
        await actor.ensure_initialized()
        exported = await actor.export_session()

        # Assert
        assert schema.ready is True
        assert exported.created_at == 100

    @pytest.mark.asyncio
    async def test_ensure_initialized_should_not_overwrite_existing_created_at(
        self, session_factory, schema
    ) -> None:
        """Test a second actor over existing data (process restart) keeps createdAt."""
        # Arrange
        first = SessionActor(SESSION_ID, session_factory, schema, clock=lambda: 100)
        await first.append_message("user", "Hello", 150)

        # Act
        restarted = SessionActor(SESSION_ID, session_factory, schema, clock=lambda: 9_999)
        exported = await restarted.export_session()

        # Assert
        assert exported.created_at == 100
        assert exported.updated_at == 150
        assert [m.content for m in exported.messages] == ["Hello"]


class TestSessionActorStorageFailure:
    """Test suite for storage fault mapping."""

    @pytest.mark.asyncio
    async def test_append_should_raise_storage_unavailable_on_db_error(self) -> None:
        """Test database errors surface as StorageUnavailableError."""
        # Arrange
        schema = MagicMock()
        schema.ensure = AsyncMock()
        session_factory = MagicMock(side_effect=_storage_fault())
        actor = SessionActor(SESSION_ID, session_factory, schema)

        # Act & Assert
        with pytest.raises(StorageUnavailableError) as exc_info:
            await actor.append_message("user", "Hello", 1000)

        assert exc_info.value.code == "internal"
        assert exc_info.value.details["component"] == "session_store"

    @pytest.mark.asyncio
    async def test_read_should_raise_storage_unavailable_when_schema_fails(self, session_factory) -> None:
        """Test schema creation faults surface as StorageUnavailableError."""
        # Arrange
        schema = MagicMock()
        schema.ensure = AsyncMock(side_effect=_storage_fault())
        actor = SessionActor(SESSION_ID, session_factory, schema)

        # Act & Assert
        with pytest.raises(StorageUnavailableError):
            await actor.get_recent_messages(10)


class TestSessionActorRegistry:
    """Test suite for SessionActorRegistry."""

    def test_get_should_return_same_actor_for_same_identity(self, registry: SessionActorRegistry) -> None:
        """Test one identity maps to exactly one actor."""
        # Act
        first = registry.get(SESSION_ID)
        second = registry.get(SESSION_ID)

        # Assert
        assert first is second
        assert SESSION_ID in registry
        assert len(registry) == 1

    def test_get_should_return_distinct_actors_for_distinct_identities(
        self, registry: SessionActorRegistry
    ) -> None:
        """Test different identities get different actors."""
        # Act
        first = registry.get("session-aaaa")
        second = registry.get("session-bbbb")

        # Assert
        assert first is not second
        assert len(registry) == 2

    def test_get_should_drop_actor_once_unreferenced(self, registry: SessionActorRegistry) -> None:
        """Test actors nobody holds are released instead of accumulating."""
        # Arrange
        for i in range(50):
            registry.get(f"session-{i:04d}")

        # Act
        gc.collect()

        # Assert
        assert len(registry) == 0
        assert "session-0000" not in registry

    def test_get_should_return_held_actor_again(self, registry: SessionActorRegistry) -> None:
        """Test an actor in use keeps its identity across lookups."""
        # Arrange
        held = registry.get(SESSION_ID)
        registry.get("session-other")

        # Act
        gc.collect()
        again = registry.get(SESSION_ID)

        # Assert
        assert again is held
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_rebuilt_actor_should_keep_stored_state(self, registry: SessionActorRegistry) -> None:
        """Test a dropped actor's successor reads the same durable log."""
        # Arrange
        await registry.get(SESSION_ID).append_message("user", "Hello", 1000)
        gc.collect()
        assert SESSION_ID not in registry

        # Act
        export = await registry.get(SESSION_ID).export_session()

        # Assert
        assert [message.content for message in export.messages] == ["Hello"]
