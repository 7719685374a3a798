"""Ingestion receiver: routes raw envelopes to per-source pipelines."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from enrolflow.interfaces.envelope import IngestionEnvelope
from enrolflow.interfaces.errors import PayloadError
from enrolflow.interfaces.record_sink import RecordSink
from enrolflow.interfaces.transformer import Transformer
from enrolflow.logging import envelope_context

from .batch import BatchCancelled
from .outcomes import Accepted, Outcome, Skipped, Unparseable, Unrecognized

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class SourceRoute:
    """The pipeline for one external source.

    Args:
        parse: Reads the source's record from an envelope. Raises
            `PayloadError` when the payload cannot be interpreted.
        transformer: Turns parsed records into canonical records.
        gate: Optional eligibility check applied to the parsed record before
            transformation. Records it rejects are reported as `Skipped`.
    """

    parse: Callable[[IngestionEnvelope], Any]
    transformer: Transformer[Any, Any]
    gate: Callable[[Any], bool] | None = None


class IngestionReceiver:
    """Route envelopes by source and report one typed outcome per envelope.

    Unknown sources and malformed payloads are reported as `Unrecognized` and
    `Unparseable` outcomes and logged; they never raise, so a caller's ingestion
    loop can dead-letter them and carry on.

    Args:
        routes: Mapping of source identifier to pipeline. Identifiers are
            matched after stripping whitespace and lower-casing, so several
            aliases may share one route.
        sink: Optional persistence collaborator. Records of accepted envelopes
            are handed to it; its failures propagate unchanged.
    """

    def __init__(
        self, routes: Mapping[str, SourceRoute], sink: RecordSink | None = None
    ) -> None:
        self._routes = {key.strip().lower(): route for key, route in routes.items()}
        self._sink = sink

    @property
    def sources(self) -> list[str]:
        """Registered source identifiers, sorted."""
        return sorted(self._routes)

    def receive(self, envelope: IngestionEnvelope) -> Outcome:
        """Route one envelope and store its records when accepted.

        Args:
            envelope: The envelope to ingest.

        Returns:
            The outcome for the envelope.
        """
        outcome = self._classify(envelope)
        if isinstance(outcome, Accepted):
            self._store(list(outcome.records))
        return outcome

    def receive_batch(
        self,
        envelopes: Iterable[IngestionEnvelope],
        cancel: threading.Event | None = None,
    ) -> list[Outcome]:
        """Route a batch of envelopes, storing all accepted records at the end.

        Args:
            envelopes: Envelopes to ingest, in order.
            cancel: Optional event checked before each envelope.

        Returns:
            One outcome per envelope, in input order.

        Raises:
            BatchCancelled: If `cancel` is set before the batch completes.
                Nothing is handed to the sink in that case.
        """
        outcomes: list[Outcome] = []
        for index, envelope in enumerate(envelopes):
            if cancel is not None and cancel.is_set():
                logger.info("Ingestion batch cancelled after %d envelope(s)", index)
                raise BatchCancelled(index)
            outcomes.append(self._classify(envelope))

        self._store(
            [
                record
                for outcome in outcomes
                if isinstance(outcome, Accepted)
                for record in outcome.records
            ]
        )
        return outcomes

    def _classify(self, envelope: IngestionEnvelope) -> Outcome:
        with envelope_context(envelope.source_key, envelope.external_id):
            return self._route(envelope)

    def _route(self, envelope: IngestionEnvelope) -> Outcome:
        route = self._routes.get(envelope.source_key)
        if route is None:
            logger.warning(
                "No pipeline for source '%s' (envelope %s)",
                envelope.source,
                envelope.external_id,
            )
            return Unrecognized(envelope, f"no pipeline for source '{envelope.source}'")

        logger.debug(
            "Handling %s envelope %s (%s)",
            envelope.source_key,
            envelope.external_id,
            envelope.event_type,
        )
        try:
            item = route.parse(envelope)
        except PayloadError as e:
            logger.warning(
                "Unparseable %s envelope %s: %s",
                envelope.source_key,
                envelope.external_id,
                e.reason,
            )
            return Unparseable(envelope, e.reason)

        if route.gate is not None and not route.gate(item):
            logger.info(
                "Skipping %s envelope %s: not eligible for capture",
                envelope.source_key,
                envelope.external_id,
            )
            return Skipped(envelope, "not eligible for capture")

        records = route.transformer.transform([item])
        logger.debug(
            "Envelope %s produced %d record(s)", envelope.external_id, len(records)
        )
        return Accepted(envelope, tuple(records))

    def _store(self, records: list[Any]) -> None:
        if self._sink is None or not records:
            return
        try:
            self._sink.store(records)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Record sink failed to store %d record(s)", len(records))
            raise
