"""``enrolflow ingest``: run envelopes through the ingestion receiver.

Reads one wire envelope per line (JSON) and writes one outcome per line
(JSON). Blank lines are ignored. A summary goes to stderr.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import IO

import click

from enrolflow.bootstrap import bootstrap
from enrolflow.config import TrainerTableError
from enrolflow.interfaces.envelope import IngestionEnvelope
from enrolflow.interfaces.errors import InvalidEnvelopeError
from enrolflow.logging import log_pipeline
from enrolflow.service_layer.outcomes import outcome_name

from .helpers import error, outcome_to_json, success, warn

logger = logging.getLogger(__name__)


def read_envelopes(stream: IO[str]) -> list[IngestionEnvelope]:
    """Parse JSON-lines wire envelopes from `stream`.

    Raises:
        click.ClickException: On the first line that is not a valid envelope.
    """
    envelopes: list[IngestionEnvelope] = []
    for line_no, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            envelopes.append(IngestionEnvelope.from_wire(json.loads(line)))
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Line {line_no}: invalid JSON ({e.msg}).") from e
        except InvalidEnvelopeError as e:
            raise click.ClickException(f"Line {line_no}: {e}") from e
    return envelopes


@click.command("ingest")
@click.argument("envelopes_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--trainers",
    "trainers_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=(
        "TOML trainer table (a [trainers] table of CODE = \"Name\"). "
        "Defaults to ENROLFLOW_TRAINERS_PATH, then the packaged table."
    ),
)
def ingest(envelopes_file: IO[str], trainers_path: Path | None) -> None:
    """Ingest JSON-lines envelopes from ENVELOPES_FILE (default: stdin).

    \b
    Each output line is a JSON object with the envelope's source, externalId
    and outcome (accepted, skipped, unrecognized, unparseable), plus the
    produced records or the reason the envelope was not accepted.
    """
    try:
        app = bootstrap(trainers_path=trainers_path)
    except TrainerTableError as e:
        raise click.ClickException(str(e)) from e
    log_pipeline(
        logger,
        sources=app.receiver.sources,
        trainer_count=len(app.trainers.trainers),
        trainers_origin=app.trainers_origin,
    )

    envelopes = read_envelopes(envelopes_file)
    logger.info("Read %d envelope(s)", len(envelopes))

    outcomes = app.receiver.receive_batch(envelopes)
    for outcome in outcomes:
        click.echo(outcome_to_json(outcome))

    counts = Counter(outcome_name(outcome) for outcome in outcomes)
    summary = ", ".join(f"{count} {name}" for name, count in sorted(counts.items()))
    message = f"Ingested {len(outcomes)} envelope(s): {summary or 'nothing to do'}."
    failed = counts["unrecognized"] + counts["unparseable"]
    if failed and failed == len(outcomes):
        error(message)
    elif failed:
        warn(message)
    else:
        success(message)
