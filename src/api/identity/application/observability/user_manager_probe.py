"""Protocol for user manager observability.

Defines the interface for domain probes that capture application-level
events of the user manager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserManagerProbe(Protocol):
    """Domain probe for user manager operations."""

    def user_created(self, user_id: str, user_name: str | None) -> None:
        """Record that a user account was created."""
        ...

    def user_updated(self, user_id: str) -> None:
        """Record that a user account was updated."""
        ...

    def user_deleted(self, user_id: str) -> None:
        """Record that a user account was deleted."""
        ...

    def email_changed(self, user_id: str) -> None:
        """Record that a new email was accepted for a user (not yet persisted)."""
        ...

    def operation_rejected(
        self, operation: str, user_id: str, error_codes: list[str]
    ) -> None:
        """Record that an operation failed validation or a store check."""
        ...

    def operation_failed(self, operation: str, user_id: str, error: str) -> None:
        """Record that an operation raised unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> UserManagerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserManagerProbe:
    """Default implementation of UserManagerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserManagerProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserManagerProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, user_name: str | None) -> None:
        """Record that a user account was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            user_name=user_name,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str) -> None:
        """Record that a user account was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        """Record that a user account was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def email_changed(self, user_id: str) -> None:
        """Record that a new email was accepted for a user."""
        self._logger.debug(
            "user_email_changed",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def operation_rejected(
        self, operation: str, user_id: str, error_codes: list[str]
    ) -> None:
        """Record that an operation failed validation or a store check."""
        self._logger.info(
            "user_operation_rejected",
            operation=operation,
            user_id=user_id,
            error_codes=error_codes,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, user_id: str, error: str) -> None:
        """Record that an operation raised unexpectedly."""
        self._logger.error(
            "user_operation_failed",
            operation=operation,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
