"""Application-level value objects for the identity context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityError:
    """A single reason an identity operation was rejected.

    Attributes:
        code: Stable machine-readable code, e.g. "DuplicateEmail"
        description: Human-readable message suitable for API clients
    """

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of a mutating user manager operation.

    Failed results carry every error found, in the order the rules ran.
    """

    succeeded: bool
    errors: tuple[IdentityError, ...] = ()

    @classmethod
    def success(cls) -> IdentityResult:
        """Create a successful result."""
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> IdentityResult:
        """Create a failed result from one or more errors."""
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def codes(self) -> list[str]:
        """Error codes in order."""
        return [error.code for error in self.errors]

    def __str__(self) -> str:
        """Return string representation."""
        if self.succeeded:
            return "Succeeded"
        return f"Failed : {','.join(self.codes)}"
