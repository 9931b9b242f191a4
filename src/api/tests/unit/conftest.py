"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock, create_autospec

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from identity.ports.repositories import IUserStore
from infrastructure.settings import DatabaseSettings, IdentitySettings


@pytest.fixture
def mock_db_settings() -> DatabaseSettings:
    """Provide test database settings."""
    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def identity_settings() -> IdentitySettings:
    """Identity rules with the framework defaults."""
    return IdentitySettings(
        password_required_length=6,
        password_required_unique_chars=1,
        password_require_digit=True,
        password_require_lowercase=True,
        password_require_uppercase=True,
        password_require_non_alphanumeric=True,
        require_unique_email=True,
    )


@pytest.fixture
def mock_session():
    """Create mock async session whose begin() works as a context manager."""
    session = Mock(spec=AsyncSession)
    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)
    session.begin = Mock(return_value=ctx_manager)
    return session


@pytest.fixture
def mock_user_store():
    """Create mock user store that finds nobody by default."""
    store = create_autospec(IUserStore, instance=True)
    store.list_all = AsyncMock(return_value=[])
    store.get_by_id = AsyncMock(return_value=None)
    store.get_by_normalized_user_name = AsyncMock(return_value=None)
    store.get_by_normalized_email = AsyncMock(return_value=None)
    store.add = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock()
    return store
