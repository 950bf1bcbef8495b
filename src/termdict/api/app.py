"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers and the
lifespan into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root. The store is opened
    and the schema binding resolved exactly once, in the lifespan, before
    the first request is served; a failure there aborts startup rather
    than serving without a binding.

Tags:
    termdict, api, app-factory, composition-root, FastAPI
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from termdict import __version__
from termdict.api.middleware.errors import unhandled_exception_handler
from termdict.api.middleware.request_id import RequestIDMiddleware
from termdict.core.context import RepositoryContext, open_context
from termdict.core.logging import configure_logging, get_logger
from termdict.core.settings import TermdictSettings, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — open the store on startup, close it on shutdown."""
    settings: TermdictSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    log = get_logger("termdict.api")
    log.info("termdict API starting", version=app.version)

    owned = app.state.repo_ctx is None
    if owned:
        app.state.repo_ctx = open_context(settings)

    yield

    if owned:
        app.state.repo_ctx.store.close()
        app.state.repo_ctx = None
    log.info("termdict API shutting down")


def create_app(
    *,
    settings: TermdictSettings | None = None,
    context: RepositoryContext | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : TermdictSettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    context : RepositoryContext | None
        Pre-built repository context. When given, the lifespan neither
        opens nor closes a store; the caller owns it.
    """

    settings = settings or get_settings()

    app = FastAPI(
        title="termdict",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )

    app.state.settings = settings
    app.state.repo_ctx = context

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from termdict.api.routers import assets, health, terms

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(terms.router, prefix="/api", tags=["terms"])
    # Catch-all; must stay last
    app.include_router(assets.router, tags=["assets"])

    return app
