"""
db.engine - Async engine bootstrap and session factory.

Designed so the connection string can be swapped to Postgres
(postgresql+asyncpg://…) by changing config.DB_URL; no other code
needs to change.

Connections are not pooled: Flask runs every async view in its own
event loop, and an aiosqlite connection cannot outlive the loop that
opened it.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import NullPool

from db.models import Base

_engine: AsyncEngine | None = None
_SessionLocal: async_sessionmaker[AsyncSession] | None = None


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async engine with SQLite pragmas applied on connect."""
    engine = create_async_engine(db_url, echo=False, poolclass=NullPool)

    if "sqlite" in db_url:
        @event.listens_for(engine.sync_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL")
            cur.execute("PRAGMA foreign_keys=ON")
            cur.execute("PRAGMA synchronous=NORMAL")
            cur.close()

    return engine


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(db_url: str) -> None:
    """Create the engine and emit CREATE TABLE."""
    global _engine, _SessionLocal

    _engine = create_engine(db_url)
    await create_tables(_engine)
    _SessionLocal = async_sessionmaker(_engine, expire_on_commit=False)


async def dispose_db() -> None:
    global _engine, _SessionLocal
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _SessionLocal = None


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal


def get_session() -> AsyncSession:
    """Return a new session.  Caller is responsible for closing it."""
    return get_sessionmaker()()
