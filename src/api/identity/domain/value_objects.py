"""Value objects for the identity domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and stamps.
"""

from __future__ import annotations

import base64
import secrets
import uuid
from dataclasses import dataclass

from ulid import ULID


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    New identifiers are ULIDs, but any non-empty string is accepted when
    looking users up so that unknown or foreign ids simply resolve to
    "not found".
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))


def new_security_stamp() -> str:
    """Random base32 token that changes whenever credentials change."""
    return base64.b32encode(secrets.token_bytes(20)).decode("ascii")


def new_concurrency_stamp() -> str:
    """Random token that changes on every persisted write."""
    return str(uuid.uuid4())
