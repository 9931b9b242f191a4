"""Identity domain: the User aggregate and its value objects."""

from identity.domain.aggregates import User
from identity.domain.value_objects import UserId

__all__ = ["User", "UserId"]
