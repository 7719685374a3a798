"""Port for the persistence collaborator.

The ingestion core never stores anything itself. Produced canonical records
are handed to a `RecordSink`, whose implementation decides how to append or
overwrite them. Failures raised by a sink belong to the collaborator and are
propagated unchanged.
"""

import abc
from collections.abc import Sequence

from enrolflow.domain.records import CanonicalRecord

# pylint: disable=too-few-public-methods


class RecordSink(abc.ABC):
    """An abstract base class for a canonical record writer."""

    @abc.abstractmethod
    def store(self, records: Sequence[CanonicalRecord]) -> None:
        """Persist `records` in the given order.

        Args:
            records: Canonical records produced from one envelope.
        """
