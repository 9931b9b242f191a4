"""Database dependency injection for FastAPI.

Provides the process-wide async engine, per-request sessions and schema
bootstrap helpers.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_database_engine
from infrastructure.database.exceptions import SchemaCreationError
from infrastructure.database.models import Base
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultDatabaseProbe()

# Module-level engine and sessionmaker (created on first use)
_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _engine is None:
                settings = get_database_settings()
                _engine = create_database_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(url=settings.connection_string, role="primary")
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session does NOT auto-commit. Services manage transactions explicitly
    with `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    get_engine()
    assert _sessionmaker is not None

    async with _sessionmaker() as session:
        yield session


async def create_schema(engine: AsyncEngine | None = None) -> list[str]:
    """Create any identity tables that do not exist yet.

    Args:
        engine: Engine to use; defaults to the application engine

    Returns:
        Names of all tables known to the metadata

    Raises:
        SchemaCreationError: If the DDL could not be executed
    """
    target = engine or get_engine()
    try:
        async with target.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        _probe.schema_creation_failed(error=e)
        raise SchemaCreationError(f"Failed to create schema: {e}") from e

    tables = sorted(Base.metadata.tables)
    _probe.schema_created(tables=tables)
    return tables


async def close_database_connections() -> None:
    """Dispose of the engine and its pool.

    Called on application shutdown. Resets the sessionmaker so the engine
    can be recreated later (e.g., between test runs).
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed(role="primary")
        _engine = None
        _sessionmaker = None
