"""The raw event envelope delivered by webhooks and polling jobs.

Wire shape (JSON object)::

    {"source": "xero", "externalId": "...", "eventType": "invoice.import",
     "payload": "<raw body as a string>"}

The payload is opaque at this level; each source's parser interprets it.
Envelopes are consumed once by the pipeline and are never persisted as-is.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import InvalidEnvelopeError

WIRE_FIELDS = {
    "source": "source",
    "external_id": "externalId",
    "event_type": "eventType",
    "payload": "payload",
}


@dataclass(frozen=True, slots=True)
class IngestionEnvelope:
    """A raw event from an external system.

    Notes:
      - `source` identifies the origin system (e.g. ``"woo"``, ``"xero"``);
        routing normalizes its case and surrounding whitespace.
      - `payload` is the raw body, interpreted per source.
    """

    source: str
    external_id: str
    event_type: str
    payload: str

    @property
    def source_key(self) -> str:
        """The routing key: `source` stripped and lower-cased."""
        return self.source.strip().lower()

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "IngestionEnvelope":
        """Build an envelope from its camelCase wire representation.

        Args:
            data: A decoded JSON object.

        Raises:
            InvalidEnvelopeError: If a field is missing or not a string.

        Returns:
            The envelope.
        """
        if not isinstance(data, Mapping):
            raise InvalidEnvelopeError("Envelope must be a JSON object.")

        values: dict[str, str] = {}
        for attr, key in WIRE_FIELDS.items():
            value = data.get(key)
            if not isinstance(value, str):
                raise InvalidEnvelopeError(f"Envelope field '{key}' must be a string.")
            values[attr] = value
        return cls(**values)

    def to_wire(self) -> dict[str, str]:
        """Return the camelCase wire representation."""
        return {key: getattr(self, attr) for attr, key in WIRE_FIELDS.items()}
