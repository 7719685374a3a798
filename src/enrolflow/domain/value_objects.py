"""Module including value objects used across the domain layer."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransferReason(Enum):
    """Why an attendee was moved from one course booking to another."""

    UNKNOWN = "unknown"
    COURSE_CANCELLED = "course_cancelled"
    ATTENDEE_REQUESTED = "attendee_requested"


@dataclass(frozen=True, slots=True)
class TransferClassification:
    """Structured reading of a booking designation note.

    `refund_eligible` is derived from `reason` so it can never disagree with it:
    only a transfer caused by a cancelled course is eligible for a refund.
    """

    is_transfer: bool = False
    original_sku: str = ""
    reason: TransferReason = TransferReason.UNKNOWN

    @property
    def refund_eligible(self) -> bool:
        """True only when the original course was cancelled."""
        return self.reason is TransferReason.COURSE_CANCELLED


NOT_A_TRANSFER = TransferClassification()


@dataclass(frozen=True, slots=True)
class InvoiceRecord:
    """An accounting-system invoice, as far as the ingestion core needs it.

    Only `type`, `status`, `reference` and `issue_date` take part in the
    eligibility decision; the remaining fields feed the canonical order.
    """

    # pylint: disable=too-many-instance-attributes

    type: str
    status: str
    reference: str | None = None
    issue_date: datetime | None = None
    invoice_id: str = ""
    invoice_number: str = ""
    contact_name: str = ""
    contact_company: str = ""
    contact_email: str = ""
    sub_total: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    amount_due: Decimal = Decimal("0")
    currency: str = "GBP"
