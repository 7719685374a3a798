"""Configuration utilities for ENROLFLOW.

This module centralizes small helpers and constants related to application
configuration. The trainer table is loaded from a TOML file: the packaged
default unless `ENROLFLOW_TRAINERS_PATH` points elsewhere.
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)

TRAINERS_PATH_ENV = "ENROLFLOW_TRAINERS_PATH"  # pragma: no mutate
TRAINERS_TABLE_KEY = "trainers"  # pragma: no mutate
DEFAULT_TRAINERS_RESOURCE = "trainers.toml"  # pragma: no mutate


class TrainerTableError(Exception):
    """Raised when the trainer table cannot be read or has the wrong shape."""


def get_trainers_path() -> Path | None:
    """Get the trainer table override from the environment.

    Returns:
        The value of `ENROLFLOW_TRAINERS_PATH` as a path, or None if unset.
    """
    if not (path := os.environ.get(TRAINERS_PATH_ENV)):
        return None
    return Path(path)


def trainer_table_origin(path: Path | None = None) -> str:
    """Describe where `load_trainer_table` reads from for the same `path`."""
    path = path or get_trainers_path()
    return f"<packaged {DEFAULT_TRAINERS_RESOURCE}>" if path is None else str(path)


def load_trainer_table(path: Path | None = None) -> Mapping[str, str]:
    """Load the trainer code -> name table.

    Args:
        path: TOML file to read. Defaults to `ENROLFLOW_TRAINERS_PATH`, then
            to the table packaged with enrolflow.

    Returns:
        A read-only mapping of trainer codes to names.

    Raises:
        TrainerTableError: If the file cannot be read, is not valid TOML, or
            has no ``[trainers]`` table of strings.
    """
    path = path or get_trainers_path()
    origin = trainer_table_origin(path)
    try:
        if path is None:
            text = files("enrolflow.data").joinpath(DEFAULT_TRAINERS_RESOURCE).read_text(
                encoding="utf-8"
            )
        else:
            text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TrainerTableError(f"Cannot read trainer table {origin}: {e}") from e

    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise TrainerTableError(f"Invalid TOML in trainer table {origin}: {e}") from e

    table = document.get(TRAINERS_TABLE_KEY)
    if not isinstance(table, dict) or not all(
        isinstance(name, str) for name in table.values()
    ):
        raise TrainerTableError(
            f"Trainer table {origin} must have a [{TRAINERS_TABLE_KEY}] table of "
            "CODE = \"Name\" entries."
        )

    logger.debug("Loaded %d trainer(s) from %s", len(table), origin)
    return MappingProxyType(dict(table))
