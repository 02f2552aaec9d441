"""Configuration management commands."""

import json

import click

from catalog_service.cli.utils import info, success, warning
from catalog_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
def show(output_format: str) -> None:
    """Display the effective configuration with secrets masked."""
    info("Loading configuration...")

    app = get_app_settings()
    db = get_db_settings()
    logs = get_logging_settings()
    pagination = get_pagination_settings()

    secret = pagination.cursor_signing_secret
    if secret is None or not secret.get_secret_value():
        warning("CURSOR_SIGNING_SECRET is not set; the development secret will be used")

    config_dict: dict[str, dict[str, object]] = {
        "app": {
            "name": app.service_name,
            "environment": app.environment,
            "debug": app.debug,
            "api_prefix": app.api_prefix,
        },
        "database": {
            "configured": db.is_configured,
            "host": db.host,
            "port": db.port,
            "name": db.name,
            "pool_size": db.pool_size,
        },
        "logging": {
            "level": logs.level,
            "json_logs": logs.json_logs,
        },
        "pagination": {
            "default_limit": pagination.default_limit,
            "max_limit": pagination.max_limit,
            "tools_default_limit": pagination.tools_default_limit,
            "cursor_ttl_minutes": pagination.cursor_ttl_minutes,
            "cursor_signing_secret": "***" if secret and secret.get_secret_value() else None,
        },
    }

    if output_format == "json":
        click.echo(json.dumps(config_dict, indent=2, default=str))
    else:
        click.echo("\n" + "=" * 60)
        click.echo("CONFIGURATION SETTINGS")
        click.echo("=" * 60)
        for section, values in config_dict.items():
            click.echo(f"\n[{section.upper()}]")
            for key, value in values.items():
                click.echo(f"  {key:24} = {value}")
        click.echo("\n" + "=" * 60)

    success("Configuration loaded successfully!")


__all__ = ["config"]
