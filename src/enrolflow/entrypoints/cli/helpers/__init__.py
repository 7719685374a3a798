"""CLI helpers for ENROLFLOW.

Utilities used by the command-line interface: JSON rendering of outcomes and
records for stdout, and message emitters that write to stderr with
emoji→ASCII fallbacks.
"""

from .json_output import outcome_to_json, to_jsonable
from .messages import error, success, warn

__all__ = ["error", "outcome_to_json", "success", "to_jsonable", "warn"]
