"""Domain-Oriented Observability for identity infrastructure."""

from identity.infrastructure.observability.store_probe import (
    DefaultUserStoreProbe,
    UserStoreProbe,
)

__all__ = [
    "DefaultUserStoreProbe",
    "UserStoreProbe",
]
