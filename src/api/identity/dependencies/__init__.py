"""Dependency injection providers for the identity context."""

from identity.dependencies.user import (
    get_observation_context,
    get_user_manager,
    get_user_store,
)

__all__ = [
    "get_observation_context",
    "get_user_manager",
    "get_user_store",
]
