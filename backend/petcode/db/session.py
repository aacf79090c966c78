"""Engine and sessionmaker registry keyed by database URL."""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

_engines: dict[str, AsyncEngine] = {}
_sessionmakers: dict[str, async_sessionmaker[AsyncSession]] = {}


def _create_engine(database_url: str) -> AsyncEngine:
    if make_url(database_url).get_backend_name() == "sqlite":
        return create_async_engine(database_url, future=True)
    return create_async_engine(database_url, future=True, pool_pre_ping=True)


def get_sessionmaker(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Return the sessionmaker for ``database_url``, creating its engine once."""
    sessionmaker = _sessionmakers.get(database_url)
    if sessionmaker is None:
        engine = _create_engine(database_url)
        sessionmaker = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
        _engines[database_url] = engine
        _sessionmakers[database_url] = sessionmaker
    return sessionmaker


async def dispose_engine(database_url: str) -> None:
    """Dispose and forget the engine for ``database_url``, if one was created."""
    engine = _engines.pop(database_url, None)
    _sessionmakers.pop(database_url, None)
    if engine is not None:
        await engine.dispose()
