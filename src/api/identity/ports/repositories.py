"""Repository protocols (ports) for the identity context.

The user store is the persistence capability the user manager builds on.
Implementations never validate; they persist what they are given and
report constraint or concurrency violations as exceptions.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identity.domain.aggregates import User
from identity.domain.value_objects import UserId


@runtime_checkable
class IUserStore(Protocol):
    """Persistence port for User aggregates.

    Callers own the transaction; implementations only stage and flush
    changes on the session they were given.
    """

    async def list_all(self) -> list[User]:
        """Return every stored user ordered by user name."""
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by id.

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_normalized_user_name(self, normalized_user_name: str) -> User | None:
        """Retrieve a user by normalized user name."""
        ...

    async def get_by_normalized_email(self, normalized_email: str) -> User | None:
        """Retrieve a user by normalized email.

        When several accounts share an email (uniqueness disabled) the first
        match is returned.
        """
        ...

    async def add(self, user: User) -> None:
        """Insert a new user.

        Raises:
            DuplicateUserError: If a unique constraint rejected the row
        """
        ...

    async def update(self, user: User, expected_stamp: str | None) -> None:
        """Overwrite a stored user if its stamp still equals expected_stamp.

        Args:
            user: The aggregate carrying the new values and new stamp
            expected_stamp: The concurrency stamp the caller last read

        Raises:
            ConcurrencyFailureError: If the row is gone or was modified
            DuplicateUserError: If a unique constraint rejected the change
        """
        ...

    async def delete(self, user: User) -> None:
        """Hard-delete a user and its dependent identity rows.

        Raises:
            ConcurrencyFailureError: If the row is gone or was modified
        """
        ...
