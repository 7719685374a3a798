"""Transfer detection for booking designation notes.

Attendee tickets carry a free-text "designation" typed by staff. When a
booking replaces an earlier one the note reads, for example::

    Transfer from PSM-061125-CB
    Transfer from cancelled PSM-061125-CB

The leading phrase and the optional ``cancelled`` keyword are matched
case-insensitively; the SKU that follows is kept exactly as written.
"""

import re

from .value_objects import NOT_A_TRANSFER, TransferClassification, TransferReason

TRANSFER_PHRASE_PATTERN = re.compile(r"transfer from", re.IGNORECASE)
CANCELLED_KEYWORD_PATTERN = re.compile(r"\s*cancelled(?=\s|$)", re.IGNORECASE)


def parse_designation(text: str | None) -> TransferClassification:
    """Classify a designation note.

    Args:
        text: The raw designation, possibly ``None`` or empty.

    Returns:
        A fully populated classification. Notes that do not start with
        "transfer from" yield the not-a-transfer result; this function never
        raises.
    """
    if not text or not (phrase := TRANSFER_PHRASE_PATTERN.match(text)):
        return NOT_A_TRANSFER

    remainder = text[phrase.end() :]
    if keyword := CANCELLED_KEYWORD_PATTERN.match(remainder):
        reason = TransferReason.COURSE_CANCELLED
        remainder = remainder[keyword.end() :]
    else:
        reason = TransferReason.ATTENDEE_REQUESTED

    return TransferClassification(
        is_transfer=True,
        original_sku=remainder.strip(),
        reason=reason,
    )
