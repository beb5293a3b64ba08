"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marquee.config import Settings
from marquee.interface.api.errors import register_error_handlers
from marquee.interface.api.routes import (
    health,
    invites,
    notifications,
    relationships,
    sharing,
    users,
)
from marquee.util.background import drain_background_tasks
from marquee.util.di.container import create_container, setup_di
from marquee.util.logging import setup_logging
from marquee.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Let in-flight alert deliveries finish before the container closes
    await drain_background_tasks()
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    setup_logging(settings)

    app_instance = FastAPI(
        title="Marquee API",
        description="Backend API for Marquee - shared watchlists with friends and partners",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(relationships.router)
    app_instance.include_router(sharing.router)
    app_instance.include_router(users.router)
    app_instance.include_router(notifications.router)

    return app_instance
