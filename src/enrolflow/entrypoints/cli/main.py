"""enrolflow CLI entry point.

Defines the top-level ``enrolflow`` command (via Click-Extra) and registers
its subcommands.

Currently available commands
- ``enrolflow ingest``: run JSON-lines envelopes through the receiver.
- ``enrolflow where``: print the server-side invoice query predicate.
- ``enrolflow designation``: classify a ticket designation note.
- ``enrolflow trainer``: resolve the trainer encoded in a SKU.

Examples
    $ enrolflow --version
    $ enrolflow -v ingest envelopes.jsonl
    $ enrolflow where --modified-since 2025-01-01
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from enrolflow import __version__
from enrolflow.logging import (
    DEFAULT_FLIGHT_CAPACITY,
    LoggingSettings,
    configure_logging,
    log_startup,
)

from .helpers.log_level_parser import parse_log_level
from .ingest import ingest
from .lookups import designation, trainer, where

logger = logging.getLogger(__name__)


HELP = """ENROLFLOW command-line interface.

    ENROLFLOW ingests raw events from a course webstore and an accounting
    system and normalizes them into orders, enrolments, course schedules and
    transfers. Unknown sources and malformed payloads are reported, never fatal.
    """

DEFAULT_LOG_PATH = (
    Path(user_log_dir("enrolflow", appauthor=False, ensure_exists=True)) / "latest.log"
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Show more on the console: -v adds INFO (routing, skipped invoices), "
        "-vv adds DEBUG."
    ),
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Show less on the console: -q keeps errors only, -qq critical only.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Show everything on the console, tagged with logger, envelope and source.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Minimum level for a named logger, as NAME=LEVEL "
        "(e.g. -L enrolflow.adapters=INFO). Repeatable; applies to the console "
        "and the flight recorder. click_extra is held at WARNING unless overridden."
    ),
    envvar="ENROLFLOW_LOGGER_LEVELS",
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    help=(
        "Keep recent DEBUG records in memory and write them to --log-path "
        "whenever an envelope is dead-lettered or anything else logs a warning."
    ),
    envvar="ENROLFLOW_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    help="Flight recorder file.",
    envvar="ENROLFLOW_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=DEFAULT_FLIGHT_CAPACITY,
    hidden=True,
    envvar="ENROLFLOW_FLIGHT_RECORDER_CAPACITY",
    help="Number of records the flight recorder keeps.",
)
@click.option(
    "--force-flush/--no-force-flush",
    default=False,
    help=(
        "Also write the flight recorder buffer on exit, "
        "e.g. to keep the trail of a clean batch."
    ),
    envvar="ENROLFLOW_FORCE_FLUSH_FLIGHT_RECORDER",
    show_envvar=True,
)
@clickx.pass_context
def enrolflow(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    logger_levels: dict[str, int],
    flight_recorder: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    force_flush: bool,
) -> None:
    """ENROLFLOW command-line interface."""
    settings = LoggingSettings(
        verbosity=verbose_count - quiet_count,
        debug=debug,
        color=ctx.color is not False,  # None means auto-detect
        log_path=log_path if flight_recorder else None,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, __version__)

    ctx.call_on_close(logging.shutdown)  # runs after the subcommand returns


enrolflow.add_command(ingest)
enrolflow.add_command(where)
enrolflow.add_command(designation)
enrolflow.add_command(trainer)
