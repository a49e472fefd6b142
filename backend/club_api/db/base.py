"""Declarative base, engine lifecycle and session factory."""

import uuid

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from club_api.core.config import get_settings


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """Opaque identifier for every stored record."""
    return str(uuid.uuid4())


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_db(url: str | None = None, echo: bool = False) -> None:
    """Create the engine and session factory, then create missing tables.

    A second call is a no-op until close_db() has run.
    """
    global _engine, _session_factory

    if _engine is not None:
        return

    db_url = url or get_settings().database_url

    _engine = create_async_engine(db_url, echo=echo, pool_pre_ping=True)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Populate Base.metadata before create_all
    import club_api.db.models  # noqa: F401

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine and release all connections."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the configured session factory.

    Raises RuntimeError if init_db() has not been called.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory
