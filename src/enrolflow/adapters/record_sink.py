"""In-memory implementation of the RecordSink interface."""

import threading
from collections.abc import Sequence

from enrolflow.domain.records import CanonicalRecord
from enrolflow.interfaces.record_sink import RecordSink


class InMemoryRecordSink(RecordSink):
    """In-memory implementation of the RecordSink interface.

    This implementation is intended for testing and development purposes only.
    It does not persist data and is not suitable for production use.
    """

    def __init__(self) -> None:
        self._records: list[CanonicalRecord] = []
        self._lock = threading.Lock()

    def store(self, records: Sequence[CanonicalRecord]) -> None:
        with self._lock:
            self._records.extend(records)

    @property
    def records(self) -> list[CanonicalRecord]:
        """A snapshot of every record stored so far, in arrival order."""
        with self._lock:
            return list(self._records)
