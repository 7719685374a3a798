"""Logging for the enrolflow CLI.

Console output goes through Rich at the threshold picked with ``-v``/``-q``.
A flight recorder buffers every record at DEBUG granularity and writes the
buffer to disk when a warning is logged, which is what happens when an
envelope is dead-lettered: the file then holds the trail that led to it.

Records logged while the receiver handles an envelope are stamped with the
envelope's ``source/externalId`` (see `envelope_context`), so interleaved
batch output can be traced back to the envelope that caused it.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.metadata import version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

PROJECT_LOGGER = "enrolflow"
NO_ENVELOPE = "-"
DEFAULT_FLIGHT_CAPACITY = 2000

CONSOLE_FORMAT = "%(library)s%(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s [%(envelope)s] %(message)s"
FLIGHT_RECORD_FORMAT = (
    "[%(asctime)s] %(levelname)s %(name)s:%(lineno)d [%(envelope)s] %(message)s"
)

# Keep consistent with click-extra's --color / --no-color option
ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

_current_envelope: ContextVar[str] = ContextVar(
    "enrolflow_envelope", default=NO_ENVELOPE
)


@contextmanager
def envelope_context(source: str, external_id: str) -> Iterator[None]:
    """Stamp records logged inside the block with ``source/external_id``."""
    token = _current_envelope.set(f"{source}/{external_id}")
    try:
        yield
    finally:
        _current_envelope.reset(token)


class EnvelopeTagFilter(logging.Filter):
    """Add the ``envelope`` and ``library`` attributes the log formats use.

    `record.envelope` names the envelope being handled, or "-" outside the
    receiver. `record.library` is a "[name] " tag for records from other
    packages (click_extra, urllib3, ...) and empty for enrolflow's own.
    Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.envelope = _current_envelope.get()
        top = record.name.split(".")[0]
        record.library = "" if top == PROJECT_LOGGER else f"[{top}] "
        return True


def console_level(verbosity: int) -> int:
    """Console threshold for a ``-v`` count minus a ``-q`` count.

    WARNING at zero, one level per step, clamped to DEBUG..CRITICAL.
    """
    level = logging.WARNING - 10 * verbosity
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LoggingSettings:
    """Logging choices collected from the command line.

    Args:
        verbosity: Number of ``-v`` minus number of ``-q``.
        debug: Show everything on the console with timestamps, logger names,
            envelope tags and source paths.
        color: Allow colored console output.
        log_path: Flight recorder file; None disables the flight recorder.
        flight_capacity: Records kept in the flight recorder buffer.
        force_flush: Write the buffer on exit even without a warning.
        logger_levels: Minimum levels for named loggers.
    """

    verbosity: int = 0
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_capacity: int = DEFAULT_FLIGHT_CAPACITY
    force_flush: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @property
    def console_level(self) -> int:
        """Effective console threshold."""
        return logging.DEBUG if self.debug else console_level(self.verbosity)

    @property
    def flight_recorder(self) -> bool:
        """True when records are buffered for `log_path`."""
        return self.log_path is not None


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the console handler and, when enabled, the flight recorder.

    The root logger lets everything through; each handler applies its own
    threshold, and `settings.logger_levels` raise the floor for named loggers
    in both.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [_console_handler(settings)]
    if settings.log_path is not None:
        handlers.append(
            _flight_recorder(
                settings.log_path, settings.flight_capacity, settings.force_flush
            )
        )

    tagger = EnvelopeTagFilter()
    for handler in handlers:
        handler.addFilter(tagger)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def _console_handler(settings: LoggingSettings) -> RichHandler:
    color_system: ColorSystem | None = "auto" if settings.color else None
    handler = RichHandler(
        level=settings.console_level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=settings.debug,
        enable_link_path=settings.debug,
    )
    handler.setFormatter(
        logging.Formatter(DEBUG_CONSOLE_FORMAT if settings.debug else CONSOLE_FORMAT)
    )
    return handler


def _flight_recorder(path: Path, capacity: int, flush_on_close: bool) -> MemoryHandler:
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(FLIGHT_RECORD_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=flush_on_close,
    )


def log_startup(
    logger: logging.Logger,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
    app_version: str,
) -> None:
    """Log a one-line startup summary, then diagnostics at DEBUG.

    The DEBUG lines only reach the console with ``-vv``, but the flight
    recorder always keeps them.
    """
    logger.info(
        "ENROLFLOW %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.console_level),
        "ON" if settings.flight_recorder else "OFF",
    )
    logger.debug(
        "Runtime: Python %s on %s %s, pid %d, cwd %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        os.getpid(),
        Path.cwd(),
    )
    logger.debug(
        "Libraries: click %s, click-extra %s, rich %s",
        version("click"),
        version("click-extra"),
        version("rich"),
    )
    logger.debug("Handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    if settings.flight_recorder:
        logger.debug(
            "Flight recorder: %s (capacity %d, flush on exit: %s)",
            settings.log_path,
            settings.flight_capacity,
            "yes" if settings.force_flush else "no",
        )
    logger.debug(
        "Logger levels: %s",
        ", ".join(
            f"{name}={logging.getLevelName(level)}"
            for name, level in sorted(settings.logger_levels.items())
        )
        or "<defaults>",
    )


def log_pipeline(
    logger: logging.Logger,
    *,
    sources: list[str],
    trainer_count: int,
    trainers_origin: str,
) -> None:
    """Log how the receiver is wired: its routed sources and trainer table."""
    logger.info("Routing sources: %s", ", ".join(sources) or "<none>")
    logger.info("Trainer table: %d trainer(s) from %s", trainer_count, trainers_origin)
