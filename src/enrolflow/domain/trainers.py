"""Trainer lookup from composite course SKUs.

Course SKUs are hyphen-delimited, e.g. ``PSM-061125-CB``: course code, start
date, and a trailing trainer code. The trainer table is configuration data,
loaded once at startup and never changed afterwards.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .errors import InvalidTrainerCodeError

DEFAULT_TRAINERS: Mapping[str, str] = MappingProxyType(
    {
        "AB": "Alex Brown",
        "CB": "Chris Bexon",
    }
)


class TrainerLookup:
    """Resolve the trainer encoded in the last segment of a SKU.

    Codes are compared case-insensitively. The table is copied into a
    read-only mapping on construction, so instances are safe to share
    between threads.

    Args:
        trainers: Mapping of short trainer codes to full names.

    Raises:
        InvalidTrainerCodeError: If a code is blank or contains a hyphen (it
            could never match the last SKU segment).
    """

    def __init__(self, trainers: Mapping[str, str] = DEFAULT_TRAINERS) -> None:
        for code in trainers:
            if not code.strip() or "-" in code:
                raise InvalidTrainerCodeError(code)
        self._trainers: Mapping[str, str] = MappingProxyType(
            {code.strip().casefold(): name for code, name in trainers.items()}
        )

    @property
    def trainers(self) -> Mapping[str, str]:
        """The read-only code -> name table (codes are case-folded)."""
        return self._trainers

    def from_sku(self, sku: str | None) -> str | None:
        """Return the trainer name for `sku`, or None when it has no known code."""
        if sku is None or not sku.strip():
            return None

        segments = [segment for segment in sku.split("-") if segment]
        if not segments:
            return None

        code = segments[-1].strip().casefold()
        return self._trainers.get(code)
