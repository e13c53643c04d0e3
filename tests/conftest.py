"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory session store, controllable clock, actor registry, model/resolver mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from chat_backend.boundary.db.connection import (
    SchemaInitializer,
    get_async_engine,
    get_async_session_factory,
)
from chat_backend.configs.chat import ChatSettings
from chat_backend.core.rate_limiter import SlidingWindowRateLimiter
from chat_backend.core.session_actor import SessionActorRegistry


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Provide controllable clock starting at t=1000ms."""
    return FakeClock()


@pytest.fixture
async def engine():
    """
    Create in-memory SQLite async engine for testing.

    Yields:
        AsyncEngine: Engine sharing one connection through StaticPool
    """
    engine = get_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Provide async session factory bound to the test engine."""
    return get_async_session_factory(engine)


@pytest.fixture
def schema(engine) -> SchemaInitializer:
    """Provide schema initializer for the test engine."""
    return SchemaInitializer(engine)


@pytest.fixture
def registry(session_factory, schema, clock) -> SessionActorRegistry:
    """Provide actor registry over the in-memory store."""
    return SessionActorRegistry(session_factory, schema, clock=clock)


@pytest.fixture
def rate_limiter() -> SlidingWindowRateLimiter:
    """Provide fresh rate limiter."""
    return SlidingWindowRateLimiter()


@pytest.fixture
def chat_settings() -> ChatSettings:
    """Provide chat settings with default bounds and short prompts."""
    return ChatSettings(
        system_prompt="You are a helpful assistant.",
        summarize_prompt="Summarize the conversation.",
    )


@pytest.fixture
def mock_model_client() -> AsyncMock:
    """
    Create mock ModelClient.

    Returns:
        AsyncMock: generate() returns "Model reply"
    """
    client = AsyncMock()
    client.generate = AsyncMock(return_value="Model reply")
    return client


@pytest.fixture
def mock_attachment_resolver() -> AsyncMock:
    """
    Create mock AttachmentResolver.

    Returns:
        AsyncMock: resolve() returns None (no upload)
    """
    resolver = AsyncMock()
    resolver.resolve = AsyncMock(return_value=None)
    return resolver
