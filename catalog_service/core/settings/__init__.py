"""Modular Pydantic Settings v2 configuration.

One frozen settings class per domain, each read from environment
variables (with .env support) and cached by the loaders in ``loader``:

    from catalog_service.core.settings import get_pagination_settings

    settings = get_pagination_settings()
    print(settings.max_limit)
"""

from __future__ import annotations

from .app import AppSettings, Environment
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .postgres import PostgresSettings

__all__ = [
    "AppSettings",
    "Environment",
    "LoggingSettings",
    "PaginationSettings",
    "PostgresSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
