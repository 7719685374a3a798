"""Webstore (WooCommerce) orders -> orders, enrolments and transfers.

A webstore order payload is the WooCommerce REST order object. Attendee
details come from the FooEvents ticket block stored in ``meta_data``::

    {"key": "WooCommerceEventsOrderTickets",
     "value": {"1": {"1": {"WooCommerceEventsAttendeeEmail": ..., ...}}}}

One order fans out to one `OrderRecord`, then one `EnrolmentRecord` per live
ticket, each followed by a `TransferRecord` when the ticket's designation
describes a transfer. Orders without ticket metadata fall back to one
enrolment per line item for the billing contact.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from enrolflow.adapters.payloads import (
    get_str,
    load_json_object,
    parse_datetime,
    to_decimal,
    to_int,
)
from enrolflow.domain.course_codes import fallback_sku
from enrolflow.domain.designation import parse_designation
from enrolflow.domain.order_status import normalize_status
from enrolflow.domain.records import (
    CanonicalRecord,
    EnrolmentRecord,
    OrderRecord,
    TransferRecord,
)
from enrolflow.domain.trainers import TrainerLookup
from enrolflow.interfaces.envelope import IngestionEnvelope
from enrolflow.interfaces.errors import PayloadError
from enrolflow.interfaces.transformer import fan_out

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes

SOURCE = "woo"

TICKETS_META_KEY = "WooCommerceEventsOrderTickets"
ATTENDEE_FIRST_NAME_KEY = "WooCommerceEventsAttendeeName"
ATTENDEE_LAST_NAME_KEY = "WooCommerceEventsAttendeeLastName"
ATTENDEE_EMAIL_KEY = "WooCommerceEventsAttendeeEmail"
ATTENDEE_COMPANY_KEY = "WooCommerceEventsAttendeeCompany"
ATTENDEE_DESIGNATION_KEY = "WooCommerceEventsAttendeeDesignation"
TICKET_PRODUCT_ID_KEY = "WooCommerceEventsProductID"
TICKET_STATUS_KEY = "WooCommerceEventsStatus"

SKIPPED_TICKET_STATUSES = frozenset({"canceled", "cancelled", "refunded"})
INTERNAL_COMPANIES = frozenset({"b-agile", "bagile", "bagile limited"})


# ============================================================================
#                           Source records
# ============================================================================


@dataclass(frozen=True, slots=True)
class WooLineItem:
    """A purchased product line of a webstore order."""

    name: str
    sku: str
    product_id: int | None
    quantity: int


@dataclass(frozen=True, slots=True)
class WooTicket:
    """One attendee ticket from the FooEvents metadata block."""

    email: str
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    product_id: int | None = None
    designation: str = ""
    status: str = ""

    @property
    def is_void(self) -> bool:
        """True for tickets cancelled or refunded in the ticketing plugin."""
        return self.status.strip().lower() in SKIPPED_TICKET_STATUSES


@dataclass(frozen=True, slots=True)
class WooOrder:
    """The parts of a webstore order the pipeline reads."""

    order_id: str
    number: str
    status: str
    currency: str
    total: Decimal
    total_tax: Decimal
    sub_total: Decimal
    refund_total: Decimal
    date_created: datetime | None
    billing_first_name: str
    billing_last_name: str
    billing_email: str
    billing_company: str
    line_items: tuple[WooLineItem, ...]
    tickets: tuple[WooTicket, ...]

    @property
    def billing_name(self) -> str:
        """First and last billing name joined by a space."""
        return f"{self.billing_first_name} {self.billing_last_name}".strip()

    @property
    def is_internal_transfer(self) -> bool:
        """True for orders placed by the training company itself to move attendees."""
        return self.billing_company.strip().lower() in INTERNAL_COMPANIES


# ============================================================================
#                               Parsing
# ============================================================================


def parse_woo_order(envelope: IngestionEnvelope) -> WooOrder:
    """Read a webstore order from an envelope payload.

    Raises:
        PayloadError: If the payload is not an order object with an ``id`` and
            a ``line_items`` array (e.g. a webhook ping), or its
            amounts are too large to total.
    """
    root = load_json_object(SOURCE, envelope.payload)
    if (
        isinstance(root.get("id"), bool)
        or not isinstance(root.get("id"), (int, str))
        or not isinstance(root.get("line_items"), list)
    ):
        raise PayloadError(SOURCE, "expected an order with 'id' and 'line_items'")

    order_id = str(root["id"])
    billing = root.get("billing") if isinstance(root.get("billing"), dict) else {}
    refunds = root.get("refunds") if isinstance(root.get("refunds"), list) else []
    total = to_decimal(root.get("total"))
    total_tax = to_decimal(root.get("total_tax"))
    try:
        sub_total = total - total_tax
        refund_total = sum(
            (
                to_decimal(refund.get("total"))
                for refund in refunds
                if isinstance(refund, dict)
            ),
            Decimal("0"),
        )
    except ArithmeticError as e:
        raise PayloadError(SOURCE, "order amounts out of range") from e

    return WooOrder(
        order_id=order_id,
        number=get_str(root, "number") or order_id,
        status=get_str(root, "status"),
        currency=get_str(root, "currency") or "GBP",
        total=total,
        total_tax=total_tax,
        sub_total=sub_total,
        refund_total=refund_total,
        date_created=parse_datetime(root.get("date_created")),
        billing_first_name=get_str(billing, "first_name"),
        billing_last_name=get_str(billing, "last_name"),
        billing_email=get_str(billing, "email"),
        billing_company=get_str(billing, "company"),
        line_items=tuple(
            _parse_line_item(item) for item in root["line_items"] if isinstance(item, dict)
        ),
        tickets=tuple(_parse_tickets(root.get("meta_data"))),
    )


def _parse_line_item(item: dict[str, Any]) -> WooLineItem:
    quantity = to_int(item.get("quantity"))
    return WooLineItem(
        name=get_str(item, "name"),
        sku=get_str(item, "sku").strip(),
        product_id=to_int(item.get("product_id")),
        quantity=quantity if quantity is not None else 1,
    )


def _parse_tickets(meta_data: Any) -> Iterator[WooTicket]:
    if not isinstance(meta_data, list):
        return
    block = next(
        (
            meta.get("value")
            for meta in meta_data
            if isinstance(meta, dict) and meta.get("key") == TICKETS_META_KEY
        ),
        None,
    )
    for course in _values(block):
        for ticket in _values(course):
            if not isinstance(ticket, dict):
                continue
            email = get_str(ticket, ATTENDEE_EMAIL_KEY).strip()
            if not email:
                continue
            yield WooTicket(
                email=email,
                first_name=get_str(ticket, ATTENDEE_FIRST_NAME_KEY),
                last_name=get_str(ticket, ATTENDEE_LAST_NAME_KEY),
                company=get_str(ticket, ATTENDEE_COMPANY_KEY),
                product_id=to_int(ticket.get(TICKET_PRODUCT_ID_KEY)),
                designation=get_str(ticket, ATTENDEE_DESIGNATION_KEY),
                status=get_str(ticket, TICKET_STATUS_KEY),
            )


def _values(container: Any) -> list[Any]:
    # PHP serializes sequential arrays as JSON lists and keyed ones as objects.
    if isinstance(container, dict):
        return list(container.values())
    if isinstance(container, list):
        return container
    return []


# ============================================================================
#                             Transformer
# ============================================================================


class WooOrderTransformer:
    """Transform webstore orders into order, enrolment and transfer records.

    Args:
        trainers: Lookup used to name the trainer encoded in each course SKU.
    """

    def __init__(self, trainers: TrainerLookup) -> None:
        self._trainers = trainers

    def transform(self, inputs: Iterable[WooOrder]) -> list[CanonicalRecord]:
        """Transform orders in input order."""
        return fan_out(self._expand, inputs)

    def _expand(self, order: WooOrder) -> list[CanonicalRecord]:
        records: list[CanonicalRecord] = [self._order_record(order)]
        seen: set[tuple[str, int | None, str]] = set()

        for enrolment in self._enrolments(order):
            key = (
                enrolment.attendee_email,
                enrolment.course_product_id,
                enrolment.sku,
            )
            if key in seen:
                logger.debug(
                    "Order %s: duplicate enrolment for %s on %s dropped",
                    order.order_id,
                    enrolment.attendee_email,
                    enrolment.sku,
                )
                continue
            seen.add(key)
            records.append(enrolment)
            if enrolment.transfer.is_transfer:
                records.append(self._transfer_record(enrolment))

        return records

    @staticmethod
    def _order_record(order: WooOrder) -> OrderRecord:
        return OrderRecord(
            source=SOURCE,
            external_id=order.order_id,
            order_type="public",
            status=normalize_status(SOURCE, order.status),
            raw_status=order.status,
            reference=order.number,
            billing_company=order.billing_company,
            contact_name=order.billing_name,
            contact_email=order.billing_email,
            sub_total=order.sub_total,
            total_tax=order.total_tax,
            total_amount=order.total,
            refund_total=order.refund_total,
            currency=order.currency,
            order_date=order.date_created,
            total_quantity=sum(item.quantity for item in order.line_items),
            is_internal_transfer=order.is_internal_transfer,
        )

    def _enrolments(self, order: WooOrder) -> Iterator[EnrolmentRecord]:
        if not order.tickets:
            for item in order.line_items:
                yield self._enrolment(
                    order,
                    item,
                    email=order.billing_email,
                    first_name=order.billing_first_name,
                    last_name=order.billing_last_name,
                    company=order.billing_company,
                    product_id=item.product_id,
                    designation="",
                )
            return

        for ticket in order.tickets:
            if ticket.is_void:
                logger.debug(
                    "Order %s: skipping %s ticket for %s",
                    order.order_id,
                    ticket.status,
                    ticket.email,
                )
                continue
            yield self._enrolment(
                order,
                self._line_item_for(order, ticket),
                email=ticket.email,
                first_name=ticket.first_name or order.billing_first_name,
                last_name=ticket.last_name or order.billing_last_name,
                company=ticket.company or order.billing_company,
                product_id=ticket.product_id,
                designation=ticket.designation,
            )

    def _enrolment(  # pylint: disable=too-many-arguments
        self,
        order: WooOrder,
        item: WooLineItem | None,
        *,
        email: str,
        first_name: str,
        last_name: str,
        company: str,
        product_id: int | None,
        designation: str,
    ) -> EnrolmentRecord:
        sku = self._sku_for(order, item)
        if product_id is None and item is not None:
            product_id = item.product_id
        transfer = parse_designation(designation)
        return EnrolmentRecord(
            source=SOURCE,
            order_external_id=order.order_id,
            sku=sku,
            attendee_email=email.strip().lower(),
            course_product_id=product_id,
            attendee_first_name=first_name,
            attendee_last_name=last_name,
            attendee_company=company,
            trainer_name=self._trainers.from_sku(sku),
            transfer=transfer,
            transfer_notes=designation if transfer.is_transfer else "",
        )

    @staticmethod
    def _line_item_for(order: WooOrder, ticket: WooTicket) -> WooLineItem | None:
        for item in order.line_items:
            if ticket.product_id is not None and item.product_id == ticket.product_id:
                return item
        if len(order.line_items) == 1:
            return order.line_items[0]
        return None

    @staticmethod
    def _sku_for(order: WooOrder, item: WooLineItem | None) -> str:
        if item is None:
            return ""
        if item.sku:
            return item.sku
        sku = fallback_sku(item.name, order.date_created)
        logger.warning(
            "Order %s: SKU missing for product '%s'; using fallback SKU %s",
            order.order_id,
            item.name,
            sku,
        )
        return sku

    @staticmethod
    def _transfer_record(enrolment: EnrolmentRecord) -> TransferRecord:
        transfer = enrolment.transfer
        return TransferRecord(
            source=enrolment.source,
            order_external_id=enrolment.order_external_id,
            attendee_email=enrolment.attendee_email,
            original_sku=transfer.original_sku,
            new_sku=enrolment.sku,
            reason=transfer.reason,
            refund_eligible=transfer.refund_eligible,
            notes=enrolment.transfer_notes,
        )
