"""Unit tests for UserManager.

The store and session are mocked; these tests pin down validation,
error accumulation, stamp handling and the translation of store
exceptions into failed results.
"""

from unittest.mock import AsyncMock, create_autospec

import pytest

from identity.application.observability import UserManagerProbe
from identity.application.security import verify_password
from identity.application.services.user_manager import UserManager
from identity.domain.aggregates import User
from identity.domain.value_objects import UserId
from identity.ports.exceptions import ConcurrencyFailureError, DuplicateUserError


@pytest.fixture
def mock_probe():
    """Create mock user manager probe."""
    return create_autospec(UserManagerProbe, instance=True)


@pytest.fixture
def user_manager(mock_user_store, mock_session, identity_settings, mock_probe):
    """Create UserManager with mock dependencies."""
    return UserManager(
        user_store=mock_user_store,
        session=mock_session,
        settings=identity_settings,
        probe=mock_probe,
    )


class TestUserManagerInit:
    """Tests for UserManager initialization."""

    def test_uses_default_probe_when_not_provided(
        self, mock_user_store, mock_session, identity_settings
    ):
        manager = UserManager(
            user_store=mock_user_store,
            session=mock_session,
            settings=identity_settings,
        )
        assert manager._probe is not None

    def test_falls_back_to_cached_settings(self, mock_user_store, mock_session):
        from infrastructure.settings import get_identity_settings

        manager = UserManager(user_store=mock_user_store, session=mock_session)
        assert manager._settings is get_identity_settings()


class TestQueries:
    """Tests for list_users and find_by_id."""

    @pytest.mark.asyncio
    async def test_list_users_delegates_to_store(
        self, user_manager, mock_user_store, mock_session
    ):
        users = [User.create("alice"), User.create("bob")]
        mock_user_store.list_all = AsyncMock(return_value=users)

        result = await user_manager.list_users()

        assert result == users
        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_find_by_id_returns_user(self, user_manager, mock_user_store):
        user = User.create("alice")
        mock_user_store.get_by_id = AsyncMock(return_value=user)

        assert await user_manager.find_by_id(user.id) is user
        mock_user_store.get_by_id.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_find_by_id_returns_none(self, user_manager):
        assert await user_manager.find_by_id(UserId(value="missing")) is None


class TestCreate:
    """Tests for UserManager.create."""

    @pytest.mark.asyncio
    async def test_success_persists_hashed_user(
        self, user_manager, mock_user_store, mock_probe
    ):
        user = User.create("Alice", email="Alice@Example.com")

        result = await user_manager.create(user, "Passw0rd!")

        assert result.succeeded
        mock_user_store.add.assert_awaited_once_with(user)
        assert user.normalized_user_name == "ALICE"
        assert user.normalized_email == "ALICE@EXAMPLE.COM"
        assert user.password_hash is not None
        assert user.password_hash != "Passw0rd!"
        assert verify_password("Passw0rd!", user.password_hash)
        assert user.security_stamp is not None
        mock_probe.user_created.assert_called_once_with(user.id.value, "Alice")

    @pytest.mark.asyncio
    async def test_accumulates_user_and_password_errors(
        self, user_manager, mock_user_store, mock_probe
    ):
        """Every violated rule is reported; nothing short-circuits."""
        mock_user_store.get_by_normalized_email = AsyncMock(
            return_value=User.create("bob")
        )
        user = User.create("bad name", email="taken@example.com")

        result = await user_manager.create(user, "short")

        assert not result.succeeded
        assert result.codes == [
            "InvalidUserName",
            "DuplicateEmail",
            "PasswordTooShort",
            "PasswordRequiresNonAlphanumeric",
            "PasswordRequiresDigit",
            "PasswordRequiresUpper",
        ]
        mock_user_store.add.assert_not_called()
        assert user.password_hash is None
        mock_probe.operation_rejected.assert_called_once_with(
            "create", user.id.value, result.codes
        )

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, user_manager, mock_user_store):
        mock_user_store.get_by_normalized_user_name = AsyncMock(
            return_value=User.create("ALICE")
        )

        result = await user_manager.create(
            User.create("alice", email="alice@example.com"), "Passw0rd!"
        )

        assert result.codes == ["DuplicateUserName"]
        mock_user_store.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_integrity_race_becomes_default_error(
        self, user_manager, mock_user_store
    ):
        mock_user_store.add = AsyncMock(side_effect=DuplicateUserError("unique"))

        result = await user_manager.create(
            User.create("alice", email="alice@example.com"), "Passw0rd!"
        )

        assert result.codes == ["DefaultError"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded_and_raised(
        self, user_manager, mock_user_store, mock_probe
    ):
        mock_user_store.add = AsyncMock(side_effect=RuntimeError("db down"))
        user = User.create("alice", email="alice@example.com")

        with pytest.raises(RuntimeError, match="db down"):
            await user_manager.create(user, "Passw0rd!")

        mock_probe.operation_failed.assert_called_once_with(
            "create", user.id.value, "db down"
        )


class TestUpdate:
    """Tests for UserManager.update."""

    @pytest.mark.asyncio
    async def test_success_rotates_stamp_and_persists(
        self, user_manager, mock_user_store, mock_probe
    ):
        user = User.create("alice", email="alice@example.com")
        old_stamp = user.concurrency_stamp
        user.user_name = "Alicia"

        result = await user_manager.update(user)

        assert result.succeeded
        assert user.concurrency_stamp != old_stamp
        assert user.normalized_user_name == "ALICIA"
        mock_user_store.update.assert_awaited_once_with(user, old_stamp)
        mock_probe.user_updated.assert_called_once_with(user.id.value)

    @pytest.mark.asyncio
    async def test_own_name_and_email_are_not_duplicates(
        self, user_manager, mock_user_store
    ):
        user = User.create("alice", email="alice@example.com")
        mock_user_store.get_by_normalized_user_name = AsyncMock(return_value=user)
        mock_user_store.get_by_normalized_email = AsyncMock(return_value=user)

        result = await user_manager.update(user)

        assert result.succeeded

    @pytest.mark.asyncio
    async def test_validation_failure_does_not_write(
        self, user_manager, mock_user_store
    ):
        user = User.create("", email="alice@example.com")
        old_stamp = user.concurrency_stamp

        result = await user_manager.update(user)

        assert result.codes == ["InvalidUserName"]
        assert user.concurrency_stamp == old_stamp
        mock_user_store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_stale_stamp_is_concurrency_failure(
        self, user_manager, mock_user_store
    ):
        mock_user_store.update = AsyncMock(side_effect=ConcurrencyFailureError("stale"))
        user = User.create("alice", email="alice@example.com")
        old_stamp = user.concurrency_stamp

        result = await user_manager.update(user)

        assert result.codes == ["ConcurrencyFailure"]
        assert user.concurrency_stamp == old_stamp

    @pytest.mark.asyncio
    async def test_integrity_race_becomes_default_error(
        self, user_manager, mock_user_store
    ):
        mock_user_store.update = AsyncMock(side_effect=DuplicateUserError("unique"))
        user = User.create("alice", email="alice@example.com")
        old_stamp = user.concurrency_stamp

        result = await user_manager.update(user)

        assert result.codes == ["DefaultError"]
        assert user.concurrency_stamp == old_stamp

    @pytest.mark.asyncio
    async def test_unexpected_error_restores_stamp(
        self, user_manager, mock_user_store, mock_probe
    ):
        mock_user_store.update = AsyncMock(side_effect=RuntimeError("boom"))
        user = User.create("alice", email="alice@example.com")
        old_stamp = user.concurrency_stamp

        with pytest.raises(RuntimeError):
            await user_manager.update(user)

        assert user.concurrency_stamp == old_stamp
        mock_probe.operation_failed.assert_called_once_with(
            "update", user.id.value, "boom"
        )


class TestDelete:
    """Tests for UserManager.delete."""

    @pytest.mark.asyncio
    async def test_success(self, user_manager, mock_user_store, mock_probe):
        user = User.create("alice")

        result = await user_manager.delete(user)

        assert result.succeeded
        mock_user_store.delete.assert_awaited_once_with(user)
        mock_probe.user_deleted.assert_called_once_with(user.id.value)

    @pytest.mark.asyncio
    async def test_stale_stamp_is_concurrency_failure(
        self, user_manager, mock_user_store, mock_probe
    ):
        mock_user_store.delete = AsyncMock(side_effect=ConcurrencyFailureError("gone"))
        user = User.create("alice")

        result = await user_manager.delete(user)

        assert result.codes == ["ConcurrencyFailure"]
        mock_probe.user_deleted.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_is_raised(self, user_manager, mock_user_store):
        mock_user_store.delete = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await user_manager.delete(User.create("alice"))


class TestSetEmail:
    """Tests for UserManager.set_email."""

    @pytest.mark.asyncio
    async def test_success_applies_in_memory_only(
        self, user_manager, mock_user_store, mock_probe
    ):
        user = User.create("alice", email="old@example.com")
        user.email_confirmed = True
        user.rotate_security_stamp()
        old_security_stamp = user.security_stamp

        result = await user_manager.set_email(user, "New@Example.com")

        assert result.succeeded
        assert user.email == "New@Example.com"
        assert user.normalized_email == "NEW@EXAMPLE.COM"
        assert user.email_confirmed is False
        assert user.security_stamp != old_security_stamp
        mock_user_store.update.assert_not_called()
        mock_user_store.add.assert_not_called()
        mock_probe.email_changed.assert_called_once_with(user.id.value)

    @pytest.mark.asyncio
    async def test_invalid_email_leaves_user_untouched(
        self, user_manager, mock_probe
    ):
        user = User.create("alice", email="old@example.com")
        user.email_confirmed = True
        before = (user.email, user.normalized_email, user.security_stamp)

        result = await user_manager.set_email(user, "not-an-email")

        assert result.codes == ["InvalidEmail"]
        assert (user.email, user.normalized_email, user.security_stamp) == before
        assert user.email_confirmed is True
        mock_probe.email_changed.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_owned_by_other_user_is_duplicate(
        self, user_manager, mock_user_store
    ):
        mock_user_store.get_by_normalized_email = AsyncMock(
            return_value=User.create("bob", email="taken@example.com")
        )
        user = User.create("alice", email="old@example.com")

        result = await user_manager.set_email(user, "taken@example.com")

        assert result.codes == ["DuplicateEmail"]
        assert user.email == "old@example.com"

    @pytest.mark.asyncio
    async def test_keeping_own_email_succeeds(self, user_manager, mock_user_store):
        user = User.create("alice", email="alice@example.com")
        mock_user_store.get_by_normalized_email = AsyncMock(return_value=user)

        result = await user_manager.set_email(user, "alice@example.com")

        assert result.succeeded
