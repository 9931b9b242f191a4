"""Application services for the identity context."""

from identity.application.services.user_manager import UserManager

__all__ = ["UserManager"]
