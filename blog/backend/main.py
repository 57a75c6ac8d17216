"""
FastAPI application for the blog backend.

    uvicorn blog.backend.main:app

``app`` is created on first access, so importing this module never reads
configuration. Tests build their own instance with create_app().
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog.backend.api import health
from blog.backend.api.v1 import router as api_v1_router
from blog.backend.core.config import get_app_config
from blog.backend.core.config_schema import ApplicationSchema
from blog.backend.core.database import create_all, dispose_engine
from blog.backend.core.exception_handlers import register_exception_handlers
from blog.backend.core.logging import get_logger, setup_logging
from blog.backend.core.middleware import RequestContextMiddleware
from blog.backend.core.startup_checks import run_startup_checks

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, refuse unsafe settings, optionally create tables."""
    app_config = get_app_config()
    setup_logging()
    run_startup_checks()

    if app_config.database.create_tables:
        await create_all()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "api_prefix": app_config.application.api_prefix or "/",
        },
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Application shutting down")


def _install_middleware(app: FastAPI, settings: ApplicationSchema) -> None:
    # Added last runs first: CORS wraps the request context.
    app.add_middleware(RequestContextMiddleware)
    if settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time", "Content-Language"],
        )


def create_app() -> FastAPI:
    """Build the application from application.yaml."""
    settings = get_app_config().application
    docs = settings.docs_enabled

    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
    )

    _install_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=settings.api_prefix)
    return app


def get_app() -> FastAPI:
    """The process-wide application, created on first call."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
