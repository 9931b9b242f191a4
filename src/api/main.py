"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from identity.presentation import router as identity_router
from identity.presentation.errors import register_exception_handlers
from infrastructure.database.dependencies import (
    close_database_connections,
    create_schema,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def user_management_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Identity schema bootstrap (when enabled)
    - Engine disposal on shutdown
    """
    settings = get_settings()
    probe = DefaultStartupProbe()

    if get_database_settings().create_schema:
        await create_schema()
    else:
        probe.schema_bootstrap_skipped()

    probe.application_started(app_name=settings.app_name, version=__version__)
    try:
        yield
    finally:
        await close_database_connections()
        probe.application_stopped(app_name=settings.app_name)


def create_app() -> FastAPI:
    """Build the FastAPI application with routes and error handlers."""
    settings = get_settings()
    configure_logging(debug=settings.debug)

    application = FastAPI(
        title=settings.app_name,
        description="Basic user account management backed by a relational identity store",
        version=__version__,
        debug=settings.debug,
        lifespan=user_management_lifespan,
    )
    register_exception_handlers(application)
    application.include_router(identity_router)

    @application.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return application


app = create_app()
