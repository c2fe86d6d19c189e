"""Async engine and session management for the voting database."""

import asyncio

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from evoting.infrastructure.config.settings import get_settings


_SYNC_PREFIXES = ("postgresql+psycopg2://", "postgresql://", "postgres://")


def to_async_url(database_url: str) -> str:
    """Point a PostgreSQL URL at the asyncpg driver; other URLs pass through."""
    for prefix in _SYNC_PREFIXES:
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url


@dataclass
class _LoopBinding:
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]


class AsyncDatabase:
    """Owns one engine per running event loop.

    asyncpg connections cannot cross event loops, and the API server, the CLI
    and the test client each drive their own loop.
    """

    def __init__(self, database_url: str | None = None):
        self._url = to_async_url(database_url or get_settings().get_database_url())
        self._bindings: dict[int, _LoopBinding] = {}

    @property
    def url(self) -> str:
        return self._url

    def _binding(self) -> _LoopBinding:
        try:
            key = id(asyncio.get_running_loop())
        except RuntimeError:
            key = 0

        binding = self._bindings.get(key)
        if binding is None:
            engine = create_async_engine(self._url, pool_pre_ping=True)
            binding = _LoopBinding(
                engine=engine,
                sessions=async_sessionmaker(engine, expire_on_commit=False),
            )
            self._bindings[key] = binding
        return binding

    @property
    def engine(self) -> AsyncEngine:
        return self._binding().engine

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session bound to the current loop's engine.

        Rolls back when the block raises; committing belongs to the unit of
        work that wraps the session.
        """
        async with self._binding().sessions() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        bindings = list(self._bindings.values())
        self._bindings.clear()
        for binding in bindings:
            await binding.engine.dispose()


async_db = AsyncDatabase()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    async with async_db.get_session() as session:
        yield session
