"""User presentation: routes and API models."""

from identity.presentation.users.routes import router

__all__ = ["router"]
