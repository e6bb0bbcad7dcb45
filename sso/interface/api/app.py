"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from sso.interface.api.error import register_error_handlers
from sso.interface.api.routes import (
    auth,
    deauth,
    health,
    registration,
    users,
)
from sso.util.di.container import create_container, lifespan, setup_di
from sso.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container is built
            when omitted. Tests pass a container with mock components.
    """
    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Xsolla SSO",
        description="Xsolla single sign-on bridge for the forum: login, account linking and registration completion",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(deauth.router)
    app_instance.include_router(users.router)
    app_instance.include_router(registration.router)

    register_error_handlers(app_instance)

    return app_instance
