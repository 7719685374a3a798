"""Bootstrap the ingestion receiver with its per-source routes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from enrolflow import config
from enrolflow.adapters.record_sink import InMemoryRecordSink
from enrolflow.adapters.transformers import (
    WooOrderTransformer,
    WooProductTransformer,
    XeroInvoiceTransformer,
    parse_woo_order,
    parse_woo_product,
    parse_xero_invoice,
)
from enrolflow.domain.errors import InvalidTrainerCodeError
from enrolflow.domain.invoice_filter import should_capture
from enrolflow.domain.trainers import TrainerLookup
from enrolflow.interfaces.record_sink import RecordSink
from enrolflow.service_layer.receiver import IngestionReceiver, SourceRoute

WOO_ORDER_SOURCES = ("woo", "woocommerce")
WOO_PRODUCT_SOURCES = ("woo-product", "woocommerce-product")
XERO_SOURCES = ("xero",)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    receiver: IngestionReceiver
    trainers: TrainerLookup
    sink: RecordSink
    trainers_origin: str = "<built-in>"


def build_routes(trainers: TrainerLookup) -> dict[str, SourceRoute]:
    """Build the default source routes, sharing one route between aliases."""
    woo_orders = SourceRoute(parse_woo_order, WooOrderTransformer(trainers))
    woo_products = SourceRoute(parse_woo_product, WooProductTransformer(trainers))
    xero = SourceRoute(parse_xero_invoice, XeroInvoiceTransformer(), gate=should_capture)

    routes: dict[str, SourceRoute] = {}
    routes.update(dict.fromkeys(WOO_ORDER_SOURCES, woo_orders))
    routes.update(dict.fromkeys(WOO_PRODUCT_SOURCES, woo_products))
    routes.update(dict.fromkeys(XERO_SOURCES, xero))
    return routes


def build_receiver(
    trainers: TrainerLookup | None = None, sink: RecordSink | None = None
) -> IngestionReceiver:
    """Build a receiver with the default routes.

    Args:
        trainers: Trainer lookup; defaults to the built-in table.
        sink: Optional record sink for accepted records.
    """
    return IngestionReceiver(build_routes(trainers or TrainerLookup()), sink=sink)


def load_trainers(path: Path | None = None) -> TrainerLookup:
    """Load the configured trainer table into a lookup.

    Raises:
        config.TrainerTableError: If the table cannot be loaded or holds an
            unusable trainer code.
    """
    table: Mapping[str, str] = config.load_trainer_table(path)
    try:
        return TrainerLookup(table)
    except InvalidTrainerCodeError as e:
        raise config.TrainerTableError(str(e)) from e


def bootstrap(
    trainers_path: Path | None = None, sink: RecordSink | None = None
) -> AppContainer:
    """Bootstrap the receiver with the configured trainer table and a sink."""
    trainers = load_trainers(trainers_path)
    sink = sink if sink is not None else InMemoryRecordSink()
    return AppContainer(
        receiver=build_receiver(trainers, sink),
        trainers=trainers,
        sink=sink,
        trainers_origin=config.trainer_table_origin(trainers_path),
    )
