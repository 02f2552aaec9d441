"""Main CLI entry point for catalog-service management commands."""

import click

from catalog_service.cli.commands import config, cursor, database, server
from catalog_service.infra.logging import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="catalog-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Catalog Service CLI - management commands for the catalogue API.

    \b
    Command Groups:
      cursor     Continuation token diagnostics
      config     Configuration inspection
      db         Database connectivity and schema
      server     Run the API server

    \b
    Quick Start:
      catalog-service config show
      catalog-service db create-tables
      catalog-service cursor inspect TOKEN --sort-by newest
      catalog-service server run --reload
    """
    ctx.ensure_object(dict)


cli.add_command(cursor.cursor)
cli.add_command(config.config)
cli.add_command(database.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
