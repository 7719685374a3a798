"""Errors raised at the ingestion boundary.

Parsers raise `PayloadError` when a payload cannot be read under its source's
expected shape; the receiver turns that into a typed, non-fatal outcome
instead of letting it reach the caller.
"""


class IngestionError(Exception):
    """Base class for ENROLFLOW ingestion errors."""


class InvalidEnvelopeError(IngestionError):
    """The wire envelope is missing fields or has fields of the wrong type."""


class PayloadError(IngestionError):
    """The payload body cannot be interpreted for its source."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot interpret {source} payload: {reason}")
        self.source = source
        self.reason = reason
