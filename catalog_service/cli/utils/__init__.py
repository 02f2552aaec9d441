"""CLI utilities for running async operations and formatting output."""

from catalog_service.cli.utils.async_runner import coro
from catalog_service.cli.utils.formatters import (
    error,
    info,
    section,
    success,
    warning,
)

__all__ = [
    "coro",
    "error",
    "info",
    "section",
    "success",
    "warning",
]
