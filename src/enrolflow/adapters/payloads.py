"""Lenient readers for JSON payload values.

External systems are inconsistent about types: amounts arrive as numbers or
strings, ids as numbers or numeric strings, dates in several formats. These
helpers coerce a value or fall back to a default; only `load_json_object`
raises, because a body that is not a JSON object cannot be interpreted at all.
"""

import json
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from enrolflow.interfaces.errors import PayloadError

# e.g. "/Date(1700000000000+0000)/"
MS_DATE_PATTERN = re.compile(r"^/Date\((?P<ms>-?\d+)(?P<offset>[+-]\d{4})?\)/$")

DATE_FORMATS = ("%Y%m%d", "%d %B %Y", "%d %b %Y", "%B %d, %Y", "%b %d, %Y", "%d/%m/%Y")


def load_json_object(source: str, payload: str) -> dict[str, Any]:
    """Decode `payload` and require a JSON object at the top level.

    Raises:
        PayloadError: If the payload is not valid JSON or not an object.
    """
    try:
        root = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PayloadError(source, f"invalid JSON ({e.msg})") from e
    except (ValueError, RecursionError) as e:
        # over-long integer literals and very deep nesting
        raise PayloadError(
            source, f"JSON exceeds decoder limits ({type(e).__name__})"
        ) from e
    if not isinstance(root, dict):
        raise PayloadError(source, "expected a JSON object")
    return root


def get_str(obj: Any, key: str, default: str = "") -> str:
    """Return ``obj[key]`` when `obj` is a dict and the value is a string."""
    if not isinstance(obj, dict):
        return default
    value = obj.get(key)
    return value if isinstance(value, str) else default


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce a JSON number or numeric string to a finite Decimal."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return default
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return default
    return number if number.is_finite() else default


def to_int(value: Any) -> int | None:
    """Coerce a JSON integer or integral string to int."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        try:
            return int(value.strip())
        except ValueError:  # beyond the int string conversion limit
            return None
    return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse ISO-8601, ``/Date(ms±zzzz)/`` and a few human date formats."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()

    if match := MS_DATE_PATTERN.match(text):
        return _parse_ms_date(match)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_ms_date(match: re.Match[str]) -> datetime | None:
    try:
        moment = datetime.fromtimestamp(int(match["ms"]) / 1000, tz=timezone.utc)
        if offset := match["offset"]:
            sign = -1 if offset[0] == "-" else 1
            delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
            moment = moment.astimezone(timezone(sign * delta))
    except (OverflowError, OSError, ValueError):
        # outside the platform's timestamp range, or an offset of 24h or more
        return None
    return moment
