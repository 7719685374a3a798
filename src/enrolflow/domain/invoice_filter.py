"""Eligibility rules for accounting-system invoices.

Only sales invoices (``ACCREC``) that have been approved, paid or voided are
captured. Invoices whose reference starts with ``#`` were raised for webstore
orders; those orders arrive through the webstore feed and must not be
ingested twice.

The same rules exist in two forms: `should_capture` evaluates one invoice
in-process, and `to_query_predicate` renders the rules as a server-side
``where`` expression for polling. The reference rule has no equivalent in the
accounting system's query language, so it is left out of the expression and
must always be re-applied with `should_capture` (see `filter_invoices`).
"""

from collections.abc import Iterable
from datetime import date, datetime

from .value_objects import InvoiceRecord

SALES_INVOICE_TYPE = "ACCREC"
CAPTURED_STATUSES = ("AUTHORISED", "PAID", "VOIDED")
PUBLIC_ORDER_REFERENCE_PREFIX = "#"


def is_sales_invoice(invoice: InvoiceRecord) -> bool:
    """True for accounts-receivable (sales) invoices."""
    return invoice.type == SALES_INVOICE_TYPE


def is_captured_status(invoice: InvoiceRecord) -> bool:
    """True for statuses worth capturing (exact, case-sensitive match)."""
    return invoice.status in CAPTURED_STATUSES


def is_not_public_order(invoice: InvoiceRecord) -> bool:
    """True unless the reference marks the invoice as a webstore order."""
    if invoice.reference is None:
        return True
    return not invoice.reference.startswith(PUBLIC_ORDER_REFERENCE_PREFIX)


def should_capture(invoice: InvoiceRecord) -> bool:
    """Decide whether an invoice should be ingested.

    Args:
        invoice: The invoice to check.

    Returns:
        True when the invoice is a sales invoice with a captured status and a
        reference that does not mark it as a webstore order.
    """
    return (
        is_sales_invoice(invoice)
        and is_captured_status(invoice)
        and is_not_public_order(invoice)
    )


def filter_invoices(invoices: Iterable[InvoiceRecord]) -> list[InvoiceRecord]:
    """Keep the invoices that `should_capture` accepts, preserving order."""
    return [invoice for invoice in invoices if should_capture(invoice)]


def to_query_predicate(modified_since: date | datetime | None = None) -> str:
    """Render the server-side filter expression for invoice polling.

    Args:
        modified_since: Optional lower bound on the invoice date. Only the
            calendar date is used; a value at the minimum representable date
            is treated as "no bound".

    Returns:
        The clauses joined with ``&&``, e.g.
        ``Type=="ACCREC"&&(Status=="AUTHORISED"||Status=="PAID"||Status=="VOIDED")``.
    """
    statuses = "||".join(f'Status=="{status}"' for status in CAPTURED_STATUSES)
    clauses = [f'Type=="{SALES_INVOICE_TYPE}"', f"({statuses})"]

    if modified_since is not None:
        since = (
            modified_since.date()
            if isinstance(modified_since, datetime)
            else modified_since
        )
        if since > date.min:
            clauses.append(f"Date>=DateTime({since.isoformat()})")

    return "&&".join(clauses)
