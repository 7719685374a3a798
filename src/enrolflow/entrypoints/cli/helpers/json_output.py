"""JSON rendering of receiver outcomes for the ``ingest`` command.

Each outcome becomes one JSON object on stdout, so the output can be piped
into other line-oriented tools.
"""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from enrolflow.domain.value_objects import TransferClassification
from enrolflow.service_layer.outcomes import Accepted, Outcome, outcome_name

# Properties rendered alongside the dataclass fields of these types.
DERIVED_FIELDS: dict[type, tuple[str, ...]] = {
    TransferClassification: ("refund_eligible",),
}


def to_jsonable(value: Any) -> Any:
    """Convert records and their field values to JSON-compatible values.

    Dataclasses become objects with a ``kind`` key naming their type, plus
    any properties listed in `DERIVED_FIELDS`; decimals become strings so
    amounts keep their precision.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {
            field.name: to_jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
        for name in DERIVED_FIELDS.get(type(value), ()):
            fields[name] = to_jsonable(getattr(value, name))
        return {"kind": type(value).__name__, **fields}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def outcome_to_json(outcome: Outcome) -> str:
    """Render one outcome as a single line of JSON."""
    envelope = outcome.envelope
    body: dict[str, Any] = {
        "source": envelope.source,
        "externalId": envelope.external_id,
        "outcome": outcome_name(outcome),
    }
    if isinstance(outcome, Accepted):
        body["records"] = to_jsonable(outcome.records)
    else:
        body["reason"] = outcome.reason
    return json.dumps(body, sort_keys=False)
