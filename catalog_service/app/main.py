"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from catalog_service.app.exception_handlers import configure_exception_handlers
from catalog_service.app.lifespan import lifespan
from catalog_service.app.middleware import RequestIDMiddleware
from catalog_service.app.router import setup_routers
from catalog_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)
    configure_exception_handlers(app)
    setup_routers(app, app_settings)

    return app
