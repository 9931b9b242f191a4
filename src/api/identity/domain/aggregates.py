"""User aggregate for the identity context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from identity.domain.value_objects import (
    UserId,
    new_concurrency_stamp,
    new_security_stamp,
)


@dataclass(eq=False)
class User:
    """User aggregate representing a stored account.

    Profile fields (user name, email, phone number) are plain attributes that
    callers may assign directly. Normalized names, stamps and the password
    hash are maintained by the user manager. The id is fixed at construction.
    """

    id: UserId
    user_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    normalized_user_name: str | None = None
    normalized_email: str | None = None
    email_confirmed: bool = False
    password_hash: str | None = None
    security_stamp: str | None = None
    concurrency_stamp: str | None = field(default_factory=new_concurrency_stamp)
    phone_number_confirmed: bool = False
    two_factor_enabled: bool = False
    lockout_end: datetime | None = None
    lockout_enabled: bool = True
    access_failed_count: int = 0

    @classmethod
    def create(
        cls,
        user_name: str | None,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> User:
        """Create a new, not yet persisted user with a generated id."""
        return cls(
            id=UserId.generate(),
            user_name=user_name,
            email=email,
            phone_number=phone_number,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("User id is immutable")
        super().__setattr__(name, value)

    def rotate_security_stamp(self) -> None:
        """Invalidate anything derived from the current credentials."""
        self.security_stamp = new_security_stamp()

    def rotate_concurrency_stamp(self) -> None:
        """Issue a new concurrency stamp ahead of a write."""
        self.concurrency_stamp = new_concurrency_stamp()

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.user_name})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
