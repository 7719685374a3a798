"""Normalization of source-specific order statuses."""

DEFAULT_STATUS = "pending"

STATUS_MAP: dict[tuple[str, str], str] = {
    # Webstore
    ("woo", "completed"): "completed",
    ("woo", "processing"): "completed",
    ("woo", "pending"): "pending",
    ("woo", "on-hold"): "pending",
    ("woo", "cancelled"): "cancelled",
    ("woo", "trash"): "cancelled",
    ("woo", "refunded"): "cancelled",
    ("woo", "failed"): "failed",
    # Accounting
    ("xero", "paid"): "completed",
    ("xero", "authorised"): "pending",
    ("xero", "submitted"): "pending",
    ("xero", "draft"): "pending",
    ("xero", "voided"): "cancelled",
    ("xero", "deleted"): "cancelled",
}


def normalize_status(source: str | None, raw_status: str | None) -> str:
    """Map a source status onto completed/pending/cancelled/failed.

    Blank statuses become ``pending``; unmapped statuses are returned
    lower-cased.
    """
    if raw_status is None or not raw_status.strip():
        return DEFAULT_STATUS

    status = raw_status.strip().lower()
    return STATUS_MAP.get(((source or "").lower(), status), status)
