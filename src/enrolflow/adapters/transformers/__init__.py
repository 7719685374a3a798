"""Per-source parsers and transformers.

Each source contributes a parser (`IngestionEnvelope` -> source record) and a
`Transformer` (source records -> canonical records).
"""

from .woo_orders import WooOrderTransformer, parse_woo_order
from .woo_products import WooProductTransformer, parse_woo_product
from .xero_invoices import XeroInvoiceTransformer, parse_xero_invoice

__all__ = [
    "WooOrderTransformer",
    "WooProductTransformer",
    "XeroInvoiceTransformer",
    "parse_woo_order",
    "parse_woo_product",
    "parse_xero_invoice",
]
