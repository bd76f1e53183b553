"""Async engine and request-scoped sessions for the option store."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from convert_to_blocks.core.config import Settings


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


class Database:
    """Holds the engine for the lifetime of the application.

    Usage:
        database.connect(settings)
        async with database.transaction() as session:
            ...
        await database.disconnect()
    """

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def connect(self, settings: Settings) -> None:
        self._engine = create_async_engine(
            str(settings.database_url),
            echo=settings.app_debug,
            pool_pre_ping=True,
        )
        self._sessions = create_session_factory(self._engine)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Open a session whose transaction commits on exit, or rolls back on error."""
        if self._sessions is None:
            raise RuntimeError("Database is not connected")
        async with self._sessions() as session, session.begin():
            yield session

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessions = None


database = Database()


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One transaction per request, so a settings save lands whole or not at all."""
    async with database.transaction() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
