"""User manager application service for the identity context.

The user manager is the account store the HTTP layer talks to. It owns
validation, password hashing, name normalization and transaction
boundaries, and reports outcomes as IdentityResult values instead of
raising for expected failures.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from identity.application.errors import IdentityErrorDescriber
from identity.application.observability import (
    DefaultUserManagerProbe,
    UserManagerProbe,
)
from identity.application.security import hash_password
from identity.application.validators import (
    PasswordValidator,
    UserValidator,
    normalize,
)
from identity.application.value_objects import IdentityError, IdentityResult
from identity.domain.aggregates import User
from identity.domain.value_objects import UserId
from identity.ports.exceptions import ConcurrencyFailureError, DuplicateUserError
from identity.ports.repositories import IUserStore
from infrastructure.settings import IdentitySettings, get_identity_settings


class UserManager:
    """Application service for user account management.

    Each public method runs in its own transaction. Expected failures
    (validation, duplicates, stale concurrency stamps) come back as failed
    IdentityResult values; anything else is recorded and re-raised.
    """

    def __init__(
        self,
        user_store: IUserStore,
        session: AsyncSession,
        settings: IdentitySettings | None = None,
        probe: UserManagerProbe | None = None,
        describer: IdentityErrorDescriber | None = None,
    ):
        """Initialize UserManager with dependencies.

        Args:
            user_store: Persistence port for users
            session: Database session for transaction management
            settings: Validation rules; defaults to the cached identity settings
            probe: Optional domain probe for observability
            describer: Optional source of error descriptions
        """
        self._user_store = user_store
        self._session = session
        self._settings = settings or get_identity_settings()
        self._probe = probe or DefaultUserManagerProbe()
        self._describer = describer or IdentityErrorDescriber()
        self._user_validator = UserValidator(self._settings, self._describer)
        self._password_validator = PasswordValidator(self._settings, self._describer)

    async def list_users(self) -> list[User]:
        """Return all users ordered by user name."""
        async with self._session.begin():
            return await self._user_store.list_all()

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by id, or None if no such user exists."""
        async with self._session.begin():
            return await self._user_store.get_by_id(user_id)

    async def create(self, user: User, password: str) -> IdentityResult:
        """Validate, hash the password and persist a new user.

        User name, email and password rules all run before anything is
        written; the result lists every violation found.

        Args:
            user: A new User aggregate (see User.create)
            password: The plaintext password to hash

        Returns:
            IdentityResult describing the outcome
        """
        try:
            async with self._session.begin():
                self._update_normalized_fields(user)
                errors = await self._user_validator.validate(self._user_store, user)
                errors.extend(self._password_validator.validate(password))
                if not errors:
                    user.password_hash = hash_password(password)
                    user.rotate_security_stamp()
                    await self._user_store.add(user)
        except DuplicateUserError:
            return self._rejected("create", user, [self._describer.default_error()])
        except Exception as e:
            self._probe.operation_failed("create", user.id.value, str(e))
            raise

        if errors:
            return self._rejected("create", user, errors)

        self._probe.user_created(user.id.value, user.user_name)
        return IdentityResult.success()

    async def update(self, user: User) -> IdentityResult:
        """Validate and persist every field of an existing user.

        The write only applies if nobody else changed the user since it was
        read; otherwise the result carries a ConcurrencyFailure error.

        Args:
            user: The modified User aggregate

        Returns:
            IdentityResult describing the outcome
        """
        expected_stamp = user.concurrency_stamp
        try:
            async with self._session.begin():
                self._update_normalized_fields(user)
                errors = await self._user_validator.validate(self._user_store, user)
                if not errors:
                    user.rotate_concurrency_stamp()
                    await self._user_store.update(user, expected_stamp)
        except ConcurrencyFailureError:
            user.concurrency_stamp = expected_stamp
            return self._rejected(
                "update", user, [self._describer.concurrency_failure()]
            )
        except DuplicateUserError:
            user.concurrency_stamp = expected_stamp
            return self._rejected("update", user, [self._describer.default_error()])
        except Exception as e:
            user.concurrency_stamp = expected_stamp
            self._probe.operation_failed("update", user.id.value, str(e))
            raise

        if errors:
            return self._rejected("update", user, errors)

        self._probe.user_updated(user.id.value)
        return IdentityResult.success()

    async def delete(self, user: User) -> IdentityResult:
        """Hard-delete a user.

        Args:
            user: The User aggregate as last read

        Returns:
            IdentityResult describing the outcome
        """
        try:
            async with self._session.begin():
                await self._user_store.delete(user)
        except ConcurrencyFailureError:
            return self._rejected(
                "delete", user, [self._describer.concurrency_failure()]
            )
        except Exception as e:
            self._probe.operation_failed("delete", user.id.value, str(e))
            raise

        self._probe.user_deleted(user.id.value)
        return IdentityResult.success()

    async def set_email(self, user: User, email: str | None) -> IdentityResult:
        """Validate a new email and apply it to the in-memory user.

        On success the email is assigned, marked unconfirmed and the
        security stamp rotated. Nothing is written; call update() to
        persist. On failure the user is left untouched.

        Args:
            user: The User aggregate to change
            email: The new email address

        Returns:
            IdentityResult describing the outcome
        """
        try:
            async with self._session.begin():
                errors = await self._user_validator.validate_email(
                    self._user_store, user.id, email
                )
        except Exception as e:
            self._probe.operation_failed("set_email", user.id.value, str(e))
            raise

        if errors:
            return self._rejected("set_email", user, errors)

        user.email = email
        user.normalized_email = normalize(email)
        user.email_confirmed = False
        user.rotate_security_stamp()

        self._probe.email_changed(user.id.value)
        return IdentityResult.success()

    def _update_normalized_fields(self, user: User) -> None:
        user.normalized_user_name = normalize(user.user_name)
        user.normalized_email = normalize(user.email)

    def _rejected(
        self, operation: str, user: User, errors: list[IdentityError]
    ) -> IdentityResult:
        result = IdentityResult.failed(*errors)
        self._probe.operation_rejected(operation, user.id.value, result.codes)
        return result
