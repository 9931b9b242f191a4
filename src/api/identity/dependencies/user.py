"""FastAPI dependency providers for user management."""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from identity.application.observability import (
    DefaultUserManagerProbe,
    UserManagerProbe,
)
from identity.application.services import UserManager
from identity.infrastructure.observability import (
    DefaultUserStoreProbe,
    UserStoreProbe,
)
from identity.infrastructure.user_store import UserStore
from infrastructure.database.dependencies import get_session
from infrastructure.settings import IdentitySettings, get_identity_settings
from shared_kernel.observability_context import ObservationContext


def get_observation_context(
    x_request_id: Annotated[str | None, Header()] = None,
) -> ObservationContext:
    """Build the observation context for the current request.

    Uses the caller's X-Request-ID when present so log lines can be
    correlated across services, otherwise generates one.
    """
    return ObservationContext(request_id=x_request_id or uuid.uuid4().hex)


def get_user_store_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> UserStoreProbe:
    """Get UserStoreProbe bound to the request context."""
    return DefaultUserStoreProbe().with_context(context)


def get_user_manager_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> UserManagerProbe:
    """Get UserManagerProbe bound to the request context."""
    return DefaultUserManagerProbe().with_context(context)


def get_user_store(
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[UserStoreProbe, Depends(get_user_store_probe)],
) -> UserStore:
    """Get UserStore instance.

    Args:
        session: Async database session
        probe: Store probe for observability

    Returns:
        UserStore bound to the request session
    """
    return UserStore(session=session, probe=probe)


def get_user_manager(
    user_store: Annotated[UserStore, Depends(get_user_store)],
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[IdentitySettings, Depends(get_identity_settings)],
    probe: Annotated[UserManagerProbe, Depends(get_user_manager_probe)],
) -> UserManager:
    """Get UserManager instance.

    Args:
        user_store: User store (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        settings: Identity validation rules
        probe: Manager probe for observability

    Returns:
        UserManager instance
    """
    return UserManager(
        user_store=user_store,
        session=session,
        settings=settings,
        probe=probe,
    )
