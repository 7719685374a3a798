"""Unit tests for invoice eligibility and the server-side query predicate."""

import itertools
from datetime import date, datetime

import pytest

from enrolflow.domain.invoice_filter import (
    filter_invoices,
    should_capture,
    to_query_predicate,
)
from enrolflow.domain.value_objects import InvoiceRecord

BASE_PREDICATE = (
    'Type=="ACCREC"&&(Status=="AUTHORISED"||Status=="PAID"||Status=="VOIDED")'
)

TYPES = ["ACCREC", "ACCPAY", "accrec"]
STATUSES = ["AUTHORISED", "PAID", "VOIDED", "DRAFT", "SUBMITTED", "DELETED", "paid"]
REFERENCES = [None, "", "PO 1234", "#5001", " #5001"]


@pytest.mark.parametrize(
    ("invoice_type", "status", "reference"),
    list(itertools.product(TYPES, STATUSES, REFERENCES)),
)
def test_should_capture_truth_table(invoice_type, status, reference):
    """Captured iff ACCREC, a captured status, and no leading '#' reference."""
    invoice = InvoiceRecord(type=invoice_type, status=status, reference=reference)
    expected = (
        invoice_type == "ACCREC"
        and status in {"AUTHORISED", "PAID", "VOIDED"}
        and not (reference or "").startswith("#")
    )
    assert should_capture(invoice) is expected


def test_public_order_reference_rejected_even_when_otherwise_eligible():
    """A '#' reference marks a webstore order and is never captured."""
    invoice = InvoiceRecord(type="ACCREC", status="PAID", reference="#5001")
    assert should_capture(invoice) is False


def test_issue_date_does_not_affect_eligibility():
    """The in-process decision does not depend on the date."""
    early = InvoiceRecord(type="ACCREC", status="PAID", issue_date=datetime(2000, 1, 1))
    late = InvoiceRecord(type="ACCREC", status="PAID", issue_date=datetime(2030, 1, 1))
    assert should_capture(early) is should_capture(late) is True


def test_filter_invoices_preserves_order():
    """filter_invoices keeps captured invoices in their original order."""
    invoices = [
        InvoiceRecord(type="ACCREC", status="PAID", invoice_number="1"),
        InvoiceRecord(type="ACCREC", status="PAID", reference="#9", invoice_number="2"),
        InvoiceRecord(type="ACCPAY", status="PAID", invoice_number="3"),
        InvoiceRecord(type="ACCREC", status="VOIDED", invoice_number="4"),
    ]
    assert [i.invoice_number for i in filter_invoices(invoices)] == ["1", "4"]


def test_predicate_without_date():
    """Without a bound only the type and status clauses are emitted."""
    assert to_query_predicate() == BASE_PREDICATE
    assert to_query_predicate(None) == BASE_PREDICATE


@pytest.mark.parametrize(
    "since",
    [date(2024, 1, 1), datetime(2024, 1, 1), datetime(2024, 1, 1, 23, 59, 59)],
    ids=["date", "midnight", "end-of-day"],
)
def test_predicate_with_date(since):
    """A bound adds a date clause with the calendar date only."""
    assert to_query_predicate(since) == BASE_PREDICATE + "&&Date>=DateTime(2024-01-01)"


@pytest.mark.parametrize("since", [date.min, datetime.min], ids=["date", "datetime"])
def test_minimum_date_means_no_bound(since):
    """The minimum representable date is treated as no bound."""
    assert to_query_predicate(since) == BASE_PREDICATE


def test_predicate_zero_pads_dates():
    """Dates are always rendered as yyyy-MM-dd."""
    assert to_query_predicate(date(987, 3, 4)).endswith("&&Date>=DateTime(0987-03-04)")


def test_predicate_omits_reference_rule():
    """The '#' reference rule cannot be expressed server-side."""
    assert "Reference" not in to_query_predicate(date(2024, 1, 1))
