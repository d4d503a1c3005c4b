from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from lawdesk.api.api_v1.api import api_router
from lawdesk.api.api_v1.endpoints import health
from lawdesk.core.config import Settings, settings as default_settings
from lawdesk.core.errors import register_exception_handlers
from lawdesk.services import build_services
from lawdesk.stores import StoreSet, build_stores
from lawdesk.utils.logging import configure_logging, setup_file_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, stores: Optional[StoreSet] = None) -> FastAPI:
    """
    Build the FastAPI application.

    ``stores`` overrides the backend selected by ``STORAGE_BACKEND``; tests
    pass an in-memory store set.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    if settings.LOG_DIR:
        setup_file_logging(settings.LOG_DIR)

    store_set = stores or build_stores(settings)
    services = build_services(settings, store_set)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for FastAPI application.
        Handles startup and shutdown events.
        """
        # Startup
        logger.info("Starting application...")
        await store_set.open()
        await services.auth.ensure_default_admin()

        yield

        # Shutdown
        logger.info("Shutting down application...")
        await store_set.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add compression middleware if enabled
    if settings.ENABLE_RESPONSE_COMPRESSION:
        app.add_middleware(GZipMiddleware, minimum_size=1000)

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(health.router, prefix="/health", tags=["health"])

    @app.get("/")
    async def root():
        """
        Root endpoint that returns basic API information.
        """
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "documentation": "/docs",
        }

    return app
