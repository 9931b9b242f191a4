"""Ports for the identity context."""

from identity.ports.exceptions import ConcurrencyFailureError, DuplicateUserError
from identity.ports.repositories import IUserStore

__all__ = [
    "ConcurrencyFailureError",
    "DuplicateUserError",
    "IUserStore",
]
