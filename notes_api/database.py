"""
Notes API — Database Engine & Session Management
==================================================

What:  Async SQLAlchemy engine (the connection pool), session factory and
       the FastAPI session dependency.
How:   `Database` owns one async engine. The application lifespan creates it
       at startup, stores it on `app.state.database` and disposes it at
       shutdown. Each request borrows a session through `get_db_session`,
       which rolls back on error and always closes. Services commit their
       own writes: the dependency teardown may run after the response has
       been sent, too late to turn a failed commit into a 500.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings and apply to
    server databases (PostgreSQL via asyncpg). SQLite URLs keep SQLAlchemy's
    default pool for the aiosqlite dialect.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; shares a single metadata object."""
    pass


def engine_options(settings: Settings) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine derived from settings."""
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL only in DEBUG mode
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


class Database:
    """
    Process-wide database handle.

    Lifecycle:
        1. Constructed in the lifespan (engine + pool created lazily on first use)
        2. `create_all()` optionally creates missing tables
        3. Sessions are borrowed per request via `session()`
        4. `dispose()` drains the pool on shutdown
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: returned entities stay readable after commit
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(settings.database_url, **engine_options(settings))
        return cls(engine)

    async def create_all(self) -> None:
        """Create the tables registered on Base.metadata if they do not exist."""
        # Import models so their tables are registered on the metadata
        from notes_api.models import note, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Scoped session: commit on success, rollback on any error, always close.

        The connection returns to the pool on every exit path.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """Gracefully close all connections in the pool."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
