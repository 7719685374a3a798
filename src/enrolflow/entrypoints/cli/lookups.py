"""Small lookup commands for checking classification rules by hand."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import click

from enrolflow.bootstrap import load_trainers
from enrolflow.config import TrainerTableError
from enrolflow.domain.designation import parse_designation
from enrolflow.domain.invoice_filter import to_query_predicate

from .helpers import to_jsonable, warn


@click.command("where")
@click.option(
    "--modified-since",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    default=None,
    help="Only invoices dated on or after this day (time of day is ignored).",
)
def where(modified_since: datetime | None) -> None:
    """Print the server-side invoice query predicate.

    The predicate cannot express the public-order reference rule; fetched
    invoices are filtered again before transformation.
    """
    click.echo(to_query_predicate(modified_since))


@click.command("designation")
@click.argument("text")
def designation(text: str) -> None:
    """Classify a ticket designation note as JSON.

    \b
    Example:
        enrolflow designation "Transfer from cancelled PSM-061125-CB"
    """
    click.echo(json.dumps(to_jsonable(parse_designation(text))))


@click.command("trainer")
@click.argument("sku")
@click.option(
    "--trainers",
    "trainers_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML trainer table. Defaults to ENROLFLOW_TRAINERS_PATH, then the packaged table.",
)
@click.pass_context
def trainer(ctx: click.Context, sku: str, trainers_path: Path | None) -> None:
    """Print the trainer encoded in the last segment of SKU.

    Exits with status 1 when the SKU carries no known trainer code.
    """
    try:
        lookup = load_trainers(trainers_path)
    except TrainerTableError as e:
        raise click.ClickException(str(e)) from e

    if (name := lookup.from_sku(sku)) is None:
        warn(f"No known trainer code in SKU {sku!r}.")
        ctx.exit(1)
    click.echo(name)
