"""SQLAlchemy implementation of IUserStore.

Maps User aggregates onto the Users table. Writes are guarded by the
concurrency stamp column; unique index violations are translated into
DuplicateUserError.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import User
from identity.domain.value_objects import UserId
from identity.infrastructure.models import UserModel
from identity.infrastructure.observability import (
    DefaultUserStoreProbe,
    UserStoreProbe,
)
from identity.ports.exceptions import ConcurrencyFailureError, DuplicateUserError
from identity.ports.repositories import IUserStore


class UserStore(IUserStore):
    """SQLAlchemy-backed store for User aggregates.

    The store never opens transactions itself; the user manager wraps each
    operation in `session.begin()`.
    """

    def __init__(
        self, session: AsyncSession, probe: UserStoreProbe | None = None
    ) -> None:
        """Initialize store with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserStoreProbe()

    async def list_all(self) -> list[User]:
        """Return every stored user ordered by user name."""
        stmt = select(UserModel).order_by(UserModel.user_name, UserModel.id)
        result = await self._session.execute(stmt)
        users = [_to_domain(model) for model in result.scalars().all()]

        self._probe.users_listed(len(users))
        return users

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by id.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return _to_domain(model)

    async def get_by_normalized_user_name(self, normalized_user_name: str) -> User | None:
        """Retrieve a user by normalized user name."""
        stmt = select(UserModel).where(
            UserModel.normalized_user_name == normalized_user_name
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def get_by_normalized_email(self, normalized_email: str) -> User | None:
        """Retrieve the first user with the given normalized email."""
        stmt = (
            select(UserModel)
            .where(UserModel.normalized_email == normalized_email)
            .order_by(UserModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return _to_domain(model) if model is not None else None

    async def add(self, user: User) -> None:
        """Insert a new user row.

        Raises:
            DuplicateUserError: If a unique index rejected the row
        """
        self._session.add(UserModel(id=user.id.value, **_columns(user)))
        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.unique_constraint_violated(user.id.value, str(e.orig))
            raise DuplicateUserError(str(e.orig)) from e

        self._probe.user_added(user.id.value, user.user_name)

    async def update(self, user: User, expected_stamp: str | None) -> None:
        """Overwrite the stored row if its stamp still equals expected_stamp.

        Raises:
            ConcurrencyFailureError: If the row is gone or was modified
            DuplicateUserError: If a unique index rejected the change
        """
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user.id.value,
                _stamp_matches(expected_stamp),
            )
            .values(**_columns(user))
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            self._probe.unique_constraint_violated(user.id.value, str(e.orig))
            raise DuplicateUserError(str(e.orig)) from e

        if result.rowcount == 0:
            self._probe.concurrency_conflict(user.id.value, operation="update")
            raise ConcurrencyFailureError(
                f"User {user.id.value} was modified or deleted"
            )

        self._probe.user_updated(user.id.value)

    async def delete(self, user: User) -> None:
        """Hard-delete the user; claims, logins, tokens and role links cascade.

        Raises:
            ConcurrencyFailureError: If the row is gone or was modified
        """
        stmt = delete(UserModel).where(
            UserModel.id == user.id.value,
            _stamp_matches(user.concurrency_stamp),
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            self._probe.concurrency_conflict(user.id.value, operation="delete")
            raise ConcurrencyFailureError(
                f"User {user.id.value} was modified or deleted"
            )

        self._probe.user_deleted(user.id.value)


def _columns(user: User) -> dict[str, Any]:
    """Column values for every mutable field of the aggregate."""
    return {
        "user_name": user.user_name,
        "normalized_user_name": user.normalized_user_name,
        "email": user.email,
        "normalized_email": user.normalized_email,
        "email_confirmed": user.email_confirmed,
        "password_hash": user.password_hash,
        "security_stamp": user.security_stamp,
        "concurrency_stamp": user.concurrency_stamp,
        "phone_number": user.phone_number,
        "phone_number_confirmed": user.phone_number_confirmed,
        "two_factor_enabled": user.two_factor_enabled,
        "lockout_end": user.lockout_end,
        "lockout_enabled": user.lockout_enabled,
        "access_failed_count": user.access_failed_count,
    }


def _stamp_matches(stamp: str | None) -> ColumnElement[bool]:
    # NULL never equals anything in SQL
    if stamp is None:
        return UserModel.concurrency_stamp.is_(None)
    return UserModel.concurrency_stamp == stamp


def _to_domain(model: UserModel) -> User:
    return User(
        id=UserId(value=model.id),
        user_name=model.user_name,
        email=model.email,
        phone_number=model.phone_number,
        normalized_user_name=model.normalized_user_name,
        normalized_email=model.normalized_email,
        email_confirmed=model.email_confirmed,
        password_hash=model.password_hash,
        security_stamp=model.security_stamp,
        concurrency_stamp=model.concurrency_stamp,
        phone_number_confirmed=model.phone_number_confirmed,
        two_factor_enabled=model.two_factor_enabled,
        lockout_end=model.lockout_end,
        lockout_enabled=model.lockout_enabled,
        access_failed_count=model.access_failed_count,
    )
