"""Domain-Oriented Observability for the identity application layer."""

from identity.application.observability.user_manager_probe import (
    DefaultUserManagerProbe,
    UserManagerProbe,
)

__all__ = [
    "DefaultUserManagerProbe",
    "UserManagerProbe",
]
