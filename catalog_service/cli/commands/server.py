"""Server management commands."""

import click
import uvicorn

from catalog_service.cli.utils import info, warning
from catalog_service.core.settings import get_app_settings


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option("--host", default="127.0.0.1", help="Host to bind")
@click.option("--port", default=8000, type=int, help="Port to bind")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
@click.option("--workers", default=1, type=int, help="Number of worker processes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Uvicorn log level",
)
def run(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Run the API server with uvicorn."""
    settings = get_app_settings()

    if reload and workers > 1:
        warning("--reload is incompatible with --workers > 1. Setting workers to 1.")
        workers = 1

    info(f"Server will run at: http://{host}:{port}{settings.api_prefix}")
    info(f"Environment: {settings.environment}")

    uvicorn.run(
        "catalog_service.app.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )


__all__ = ["server"]
