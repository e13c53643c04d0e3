"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and the one-time
schema initializer used by the session store.

Dependencies: sqlalchemy, chat_backend.configs
System role: Database connection lifecycle management
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from chat_backend.boundary.db.base import Base
from chat_backend.boundary.db import models  # noqa: F401  (registers tables on Base.metadata)
from chat_backend.configs import get_settings

logger = logging.getLogger(__name__)


def get_async_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine for the session store.

    In-memory SQLite URLs get a StaticPool so every session shares the
    same connection (and therefore the same database).

    Args:
        database_url: Override for the configured URL
        echo: Override for SQL echo

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database
    url = database_url or db_config.url
    kwargs: dict = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_async_engine(
        url,
        echo=db_config.echo_sql if echo is None else echo,
        **kwargs,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    autoflush=False and expire_on_commit=False keep ORM rows readable
    after the transaction that produced them has committed.

    Args:
        engine: Engine to bind sessions to

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session, session.begin():
            session.add(obj)
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


class SchemaInitializer:
    """Creates the session store tables at most once per engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._lock = asyncio.Lock()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def ensure(self) -> None:
        """Create missing tables; cheap to call repeatedly."""
        if self._ready:
            return
        async with self._lock:
            if self._ready:
                return
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._ready = True
            logger.info("Session store schema ready")
