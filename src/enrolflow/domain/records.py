"""Canonical records produced by the ingestion pipeline.

A canonical record is a normalized domain fact ready to be handed to the
persistence layer. Records are frozen: an update to the same external entity
arrives as a new envelope and yields a new record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TypeAlias

from .value_objects import NOT_A_TRANSFER, TransferClassification, TransferReason

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True, slots=True)
class OrderRecord:
    """A customer order, from either the webstore or an accounting invoice."""

    source: str
    external_id: str
    order_type: str  # "public" (webstore) or "private" (invoiced)
    status: str
    raw_status: str = ""
    reference: str | None = None
    billing_company: str = ""
    contact_name: str = ""
    contact_email: str = ""
    sub_total: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    refund_total: Decimal = Decimal("0")
    currency: str = "GBP"
    order_date: datetime | None = None
    total_quantity: int = 0
    is_internal_transfer: bool = False


@dataclass(frozen=True, slots=True)
class EnrolmentRecord:
    """One attendee booked onto one scheduled course by an order."""

    source: str
    order_external_id: str
    sku: str
    attendee_email: str
    course_product_id: int | None = None
    attendee_first_name: str = ""
    attendee_last_name: str = ""
    attendee_company: str = ""
    trainer_name: str | None = None
    transfer: TransferClassification = field(default=NOT_A_TRANSFER)
    transfer_notes: str = ""


@dataclass(frozen=True, slots=True)
class TransferRecord:
    """An attendee moved from a previous booking onto the course in `new_sku`."""

    source: str
    order_external_id: str
    attendee_email: str
    original_sku: str
    new_sku: str
    reason: TransferReason
    refund_eligible: bool
    notes: str = ""


@dataclass(frozen=True, slots=True)
class CourseScheduleRecord:
    """A scheduled run of a course, as published in the webstore catalogue."""

    source_system: str
    source_product_id: int
    name: str
    status: str
    sku: str | None = None
    price: Decimal | None = None
    capacity: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    format_type: str | None = None
    trainer_name: str | None = None


CanonicalRecord: TypeAlias = (
    OrderRecord | EnrolmentRecord | TransferRecord | CourseScheduleRecord
)
