"""Integration test fixtures backed by a real SQLite database.

Each test gets its own database file with the full identity schema and
foreign key enforcement, plus an HTTP client wired to it.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import identity.infrastructure.models  # noqa: F401
from infrastructure.database.dependencies import create_schema, get_session
from infrastructure.database.engines import create_database_engine
from infrastructure.settings import DatabaseSettings, IdentitySettings, get_identity_settings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture
def sqlite_settings(tmp_path) -> DatabaseSettings:
    """Database settings pointing at a throwaway SQLite file."""
    return DatabaseSettings(
        driver="sqlite+aiosqlite",
        database=str(tmp_path / "identity.db"),
    )


@pytest_asyncio.fixture
async def engine(sqlite_settings: DatabaseSettings) -> AsyncGenerator[AsyncEngine, None]:
    """Engine with the identity schema created."""
    engine = create_database_engine(sqlite_settings)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """A standalone session for store-level tests."""
    async with sessionmaker() as session:
        yield session


@pytest.fixture
def identity_settings() -> IdentitySettings:
    """Identity rules with the framework defaults."""
    return IdentitySettings(require_unique_email=True)


@pytest_asyncio.fixture
async def client(
    sessionmaker: async_sessionmaker[AsyncSession],
    identity_settings: IdentitySettings,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the user API backed by the test database."""
    from identity.presentation import router
    from identity.presentation.errors import register_exception_handlers

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with sessionmaker() as session:
            yield session

    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_identity_settings] = lambda: identity_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
