"""Continuation token diagnostics.

The API never says why a cursor was refused; a refused cursor just
restarts the listing. These commands answer "why did my link go back to
page one" for operators holding the signing secret.

Example:bash
    catalog-service cursor inspect eyJpZCI6IkIi...c2f1 --sort-by newest
"""

from datetime import UTC, datetime
import json
import sys

import click

from catalog_service.cli.utils import error, info, section, success, warning
from catalog_service.core.pagination import get_cursor_codec


def _format_timestamp(timestamp_ms: object) -> str:
    if not isinstance(timestamp_ms, int) or isinstance(timestamp_ms, bool):
        return repr(timestamp_ms)
    issued = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
    return issued.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@click.group(name="cursor")
def cursor() -> None:
    """Continuation token diagnostics."""


@cursor.command()
@click.argument("token")
@click.option(
    "--sort-by",
    default=None,
    help="Sort key of the request the token was sent with (default: the token's own)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
def inspect(token: str, sort_by: str | None, output_format: str) -> None:
    """Decode TOKEN and report whether it would be accepted.

    Exits with status 1 when the token would be refused.
    """
    codec = get_cursor_codec()
    payload = codec.peek(token)
    expected = sort_by or (payload or {}).get("sortBy") or ""
    validation = codec.validate(token, str(expected))

    report = {
        "valid": validation.valid,
        "reason": str(validation.reason) if validation.reason else None,
        "id": payload.get("id") if payload else None,
        "sortBy": payload.get("sortBy") if payload else None,
        "issuedAt": _format_timestamp(payload.get("timestamp")) if payload else None,
        "fields": payload.get("fields") if payload else None,
    }

    if output_format == "json":
        click.echo(json.dumps(report, indent=2, default=str))
        if not validation.valid:
            sys.exit(1)
        return

    section("CONTINUATION TOKEN")
    if payload is None:
        warning("Payload could not be decoded")
    else:
        for key in ("id", "sortBy", "issuedAt"):
            click.echo(f"  {key:12} = {report[key]}")
        fields = report["fields"] if isinstance(report["fields"], dict) else {}
        for key, value in fields.items():
            click.echo(f"  fields.{key:5} = {value}")
    info(f"TTL: {int(codec.ttl.total_seconds() // 60)} minutes")

    if validation.valid:
        success(f"Token accepted for sortBy={expected!r}")
        return
    error(f"Token refused: {validation.reason}")
    sys.exit(1)


__all__ = ["cursor"]
