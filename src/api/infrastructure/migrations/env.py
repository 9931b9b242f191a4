"""Alembic environment for the identity schema.

Connection settings come from DatabaseSettings so migrations and the
application always target the same database.
"""

import asyncio

from alembic import context
from sqlalchemy.ext.asyncio import AsyncConnection

import identity.infrastructure.models  # noqa: F401  (registers identity tables)
from infrastructure.database.engines import build_async_url, create_database_engine
from infrastructure.database.models import Base
from infrastructure.settings import get_database_settings

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=build_async_url(get_database_settings()),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync_migrations(connection: AsyncConnection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations through the application's async engine."""
    engine = create_database_engine(get_database_settings())
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
