"""
FastAPI application factory.

``create_app()`` builds the store, the registry and the request adapter,
then wires middleware, the health and models routers, and the lifespan
into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root. Tests pass their own
    settings and store here; nothing else constructs these objects.

Tags:
    modelreg, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modelreg.api.adapter import RequestAdapter
from modelreg.api.deps import get_settings
from modelreg.api.middleware.errors import unhandled_exception_handler
from modelreg.api.middleware.request_id import RequestIDMiddleware
from modelreg.api.middleware.timing import TimingMiddleware
from modelreg.api.routers import models
from modelreg.api.settings import RegistryAPISettings
from modelreg.core.health import HealthCheck, create_health_router
from modelreg.core.logging import configure_logging, get_logger
from modelreg.ops.registry import ModelRegistry
from modelreg.store.base import DocumentStore
from modelreg.store.factory import create_store

log = get_logger("modelreg.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: log startup, close the store on shutdown."""
    log.info("modelreg API starting", version=app.version, index=app.state.registry.index)
    try:
        yield
    finally:
        await app.state.store.close()
        log.info("modelreg API shutting down")


def create_app(
    *,
    settings: RegistryAPISettings | None = None,
    store: DocumentStore | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : RegistryAPISettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    store : DocumentStore | None
        Override the document store. When ``None`` one is built from
        *settings* by :func:`~modelreg.store.factory.create_store`.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, log_format=settings.log_format)

    store = store if store is not None else create_store(settings)
    registry = ModelRegistry.from_settings(store, settings)
    adapter = RequestAdapter(registry)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.store = store
    app.state.registry = registry
    app.state.adapter = adapter

    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "modelreg",
            version=settings.api_version,
            checks=[HealthCheck("store", store.ping, timeout_s=settings.store_timeout_s)],
        ),
    )
    app.include_router(models.router, prefix=settings.api_prefix, tags=["models"])

    return app
