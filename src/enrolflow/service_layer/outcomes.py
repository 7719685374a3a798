"""Outcomes reported by the ingestion receiver, one per envelope."""

from dataclasses import dataclass
from typing import TypeAlias

from enrolflow.domain.records import CanonicalRecord
from enrolflow.interfaces.envelope import IngestionEnvelope


@dataclass(frozen=True, slots=True)
class Accepted:
    """The envelope was recognized, well formed and transformed."""

    envelope: IngestionEnvelope
    records: tuple[CanonicalRecord, ...]


@dataclass(frozen=True, slots=True)
class Skipped:
    """The envelope was well formed but not eligible for capture."""

    envelope: IngestionEnvelope
    reason: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """No pipeline is registered for the envelope's source."""

    envelope: IngestionEnvelope
    reason: str


@dataclass(frozen=True, slots=True)
class Unparseable:
    """The payload could not be interpreted for the envelope's source."""

    envelope: IngestionEnvelope
    reason: str


Outcome: TypeAlias = Accepted | Skipped | Unrecognized | Unparseable


def outcome_name(outcome: Outcome) -> str:
    """Lower-case name of the outcome kind, e.g. ``"accepted"``."""
    return type(outcome).__name__.lower()
