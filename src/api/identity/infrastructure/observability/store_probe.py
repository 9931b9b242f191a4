"""Domain probe for user store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserStoreProbe(Protocol):
    """Domain probe for user store operations."""

    def user_added(self, user_id: str, user_name: str | None) -> None:
        """Record that a user row was inserted."""
        ...

    def user_updated(self, user_id: str) -> None:
        """Record that a user row was overwritten."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user row was deleted."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that all users were enumerated."""
        ...

    def concurrency_conflict(self, user_id: str, operation: str) -> None:
        """Record that a write lost an optimistic concurrency check."""
        ...

    def unique_constraint_violated(self, user_id: str, error: str) -> None:
        """Record that the database rejected a duplicate user."""
        ...

    def with_context(self, context: ObservationContext) -> UserStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserStoreProbe:
    """Default implementation of UserStoreProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserStoreProbe(logger=self._logger, context=context)

    def user_added(self, user_id: str, user_name: str | None) -> None:
        """Record that a user row was inserted."""
        self._logger.info(
            "user_added",
            user_id=user_id,
            user_name=user_name,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str) -> None:
        """Record that a user row was overwritten."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user row was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int) -> None:
        """Record that all users were enumerated."""
        self._logger.debug(
            "users_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def concurrency_conflict(self, user_id: str, operation: str) -> None:
        """Record that a write lost an optimistic concurrency check."""
        self._logger.warning(
            "user_concurrency_conflict",
            user_id=user_id,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def unique_constraint_violated(self, user_id: str, error: str) -> None:
        """Record that the database rejected a duplicate user."""
        self._logger.warning(
            "user_unique_constraint_violated",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
