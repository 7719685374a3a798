"""Accounting (Xero) invoices -> private orders.

Payloads are either a single invoice object or an API response of the form
``{"Invoices": [...]}``, in which case the first invoice is used. Webhook
notifications (``{"events": [...]}``) only point at an invoice and carry no
body to interpret.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from enrolflow.adapters.payloads import (
    get_str,
    load_json_object,
    parse_datetime,
    to_decimal,
)
from enrolflow.domain.invoice_filter import should_capture
from enrolflow.domain.order_status import normalize_status
from enrolflow.domain.records import CanonicalRecord, OrderRecord
from enrolflow.domain.value_objects import InvoiceRecord
from enrolflow.interfaces.envelope import IngestionEnvelope
from enrolflow.interfaces.errors import PayloadError
from enrolflow.interfaces.transformer import fan_out

SOURCE = "xero"


def parse_xero_invoice(envelope: IngestionEnvelope) -> InvoiceRecord:
    """Read an invoice from an envelope payload.

    Raises:
        PayloadError: If the payload holds no invoice, or the invoice lacks a
            string ``Type`` or ``Status``.
    """
    root = load_json_object(SOURCE, envelope.payload)
    invoice = _unwrap(root)

    invoice_type = invoice.get("Type")
    status = invoice.get("Status")
    if not isinstance(invoice_type, str) or not isinstance(status, str):
        raise PayloadError(SOURCE, "invoice must have string 'Type' and 'Status'")

    reference = invoice.get("Reference")
    contact = invoice.get("Contact") if isinstance(invoice.get("Contact"), dict) else {}
    contact_name = (
        f"{get_str(contact, 'FirstName')} {get_str(contact, 'LastName')}".strip()
    )

    return InvoiceRecord(
        type=invoice_type,
        status=status,
        reference=reference if isinstance(reference, str) else None,
        issue_date=parse_datetime(invoice.get("DateString"))
        or parse_datetime(invoice.get("Date")),
        invoice_id=get_str(invoice, "InvoiceID"),
        invoice_number=get_str(invoice, "InvoiceNumber") or envelope.external_id,
        contact_name=contact_name,
        contact_company=get_str(contact, "Name"),
        contact_email=get_str(contact, "EmailAddress"),
        sub_total=to_decimal(invoice.get("SubTotal")),
        total_tax=to_decimal(invoice.get("TotalTax")),
        total=to_decimal(invoice.get("Total")),
        amount_paid=to_decimal(invoice.get("AmountPaid")),
        amount_due=to_decimal(invoice.get("AmountDue")),
        currency=get_str(invoice, "CurrencyCode") or "GBP",
    )


def _unwrap(root: dict[str, Any]) -> dict[str, Any]:
    if "Invoices" in root:
        invoices = root["Invoices"]
        if not isinstance(invoices, list) or not invoices:
            raise PayloadError(SOURCE, "'Invoices' is empty")
        if not isinstance(invoices[0], dict):
            raise PayloadError(SOURCE, "'Invoices' must contain objects")
        return invoices[0]
    if "events" in root and "Type" not in root:
        raise PayloadError(SOURCE, "webhook notification carries no invoice body")
    return root


class XeroInvoiceTransformer:
    """Transform captured invoices into private orders.

    Invoices rejected by `should_capture` produce no output, which keeps
    polling batches correct even when the server-side filter could not apply
    every rule.
    """

    def transform(self, inputs: Iterable[InvoiceRecord]) -> list[CanonicalRecord]:
        """Transform invoices in input order."""
        return fan_out(self._expand, inputs)

    @staticmethod
    def _expand(invoice: InvoiceRecord) -> list[CanonicalRecord]:
        if not should_capture(invoice):
            return []
        return [
            OrderRecord(
                source=SOURCE,
                external_id=invoice.invoice_number or invoice.invoice_id,
                order_type="private",
                status=normalize_status(SOURCE, invoice.status),
                raw_status=invoice.status,
                reference=invoice.reference,
                billing_company=invoice.contact_company,
                contact_name=invoice.contact_name,
                contact_email=invoice.contact_email,
                sub_total=invoice.sub_total,
                total_tax=invoice.total_tax,
                total_amount=invoice.total,
                currency=invoice.currency,
                order_date=invoice.issue_date,
            )
        ]
