"""
member_gateway.api.app

FastAPI app factory for the member gateway.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Open and close the shared backend clients.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from member_gateway import __version__
from member_gateway.api.errors import register_error_handlers
from member_gateway.api.routers.devices import router as devices_router
from member_gateway.api.routers.filters import router as filters_router
from member_gateway.api.routers.health import router as health_router
from member_gateway.api.routers.segments import router as segments_router
from member_gateway.api.routers.stats import router as stats_router
from member_gateway.api.routers.updates import router as updates_router
from member_gateway.api.routers.versions import router as versions_router
from member_gateway.observability.logging import configure_logging, get_logger
from member_gateway.observability.middleware import RequestContextMiddleware
from member_gateway.service_clients.registry import ServiceClients, open_service_clients
from member_gateway.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, clients: ServiceClients | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, env=settings.env
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        app.state.clients = clients or open_service_clients(settings)
        try:
            yield
        finally:
            await app.state.clients.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Member Gateway",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(updates_router)
    app.include_router(segments_router)
    app.include_router(versions_router)
    app.include_router(stats_router)
    app.include_router(filters_router)
    app.include_router(devices_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; ownership and aggregation rules live in `member_gateway.services`.
