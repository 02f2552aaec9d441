"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings
from catalog_service.features.affiliate_links.router import router as affiliate_links_router
from catalog_service.features.categories.router import router as categories_router
from catalog_service.features.sponsorships.router import router as sponsorships_router
from catalog_service.features.stacks.router import router as stacks_router
from catalog_service.features.tags.router import router as tags_router
from catalog_service.features.tools.router import router as tools_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers under the API prefix.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(tools_router, prefix=api_prefix)
    app.include_router(categories_router, prefix=api_prefix)
    app.include_router(stacks_router, prefix=api_prefix)
    app.include_router(tags_router, prefix=api_prefix)
    app.include_router(sponsorships_router, prefix=api_prefix)
    app.include_router(affiliate_links_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})


__all__ = ["setup_routers"]
