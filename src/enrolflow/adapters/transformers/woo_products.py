"""Webstore (WooCommerce) course products -> course schedules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from enrolflow.adapters.payloads import (
    get_str,
    load_json_object,
    parse_datetime,
    to_decimal,
    to_int,
)
from enrolflow.domain.records import CanonicalRecord, CourseScheduleRecord
from enrolflow.domain.trainers import TrainerLookup
from enrolflow.interfaces.envelope import IngestionEnvelope
from enrolflow.interfaces.errors import PayloadError
from enrolflow.interfaces.transformer import fan_out

SOURCE = "woo"

START_DATE_KEYS = ("woocommerceeventsdate", "event_date", "start_date")
END_DATE_KEYS = ("woocommerceeventsenddate", "event_end_date", "end_date")
FORMAT_TYPE_KEYS = ("event_type", "format_type", "woocommerceeventslocation")
TRAINER_KEYS = ("trainer_name",)


@dataclass(frozen=True, slots=True)
class WooProduct:
    """A course product as published in the webstore catalogue.

    `meta` maps lower-cased meta keys to their first non-blank value.
    """

    product_id: int
    name: str
    status: str
    sku: str | None = None
    price: Decimal | None = None
    stock_quantity: int | None = None
    meta: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def first_meta(self, keys: Iterable[str]) -> str | None:
        """Value of the first of `keys` present in `meta`."""
        return next((self.meta[key] for key in keys if key in self.meta), None)


def parse_woo_product(envelope: IngestionEnvelope) -> WooProduct:
    """Read a course product from an envelope payload.

    Raises:
        PayloadError: If the payload has no integer ``id`` or string ``name``.
    """
    root = load_json_object(SOURCE, envelope.payload)
    product_id = to_int(root.get("id"))
    if product_id is None or not isinstance(root.get("name"), str):
        raise PayloadError(SOURCE, "expected a product with 'id' and 'name'")

    price = root.get("price")
    return WooProduct(
        product_id=product_id,
        name=root["name"],
        status=get_str(root, "status"),
        sku=get_str(root, "sku").strip() or None,
        price=to_decimal(price) if price not in (None, "") else None,
        stock_quantity=to_int(root.get("stock_quantity")),
        meta=MappingProxyType(_meta_values(root.get("meta_data"))),
    )


def _meta_values(meta_data: Any) -> dict[str, str]:
    values: dict[str, str] = {}
    if not isinstance(meta_data, list):
        return values
    for meta in meta_data:
        if not isinstance(meta, dict) or not get_str(meta, "key").strip():
            continue
        key = get_str(meta, "key").strip().lower()
        value = meta.get("value")
        text = str(value).strip() if isinstance(value, (str, int, float)) else ""
        if text and key not in values:
            values[key] = text
    return values


class WooProductTransformer:
    """Transform course products into course schedule records.

    The trainer comes from the product's ``trainer_name`` meta when present,
    otherwise from the trainer code at the end of its SKU.

    Args:
        trainers: Lookup used for the SKU fallback.
    """

    def __init__(self, trainers: TrainerLookup) -> None:
        self._trainers = trainers

    def transform(self, inputs: Iterable[WooProduct]) -> list[CanonicalRecord]:
        """Transform products in input order."""
        return fan_out(self._expand, inputs)

    def _expand(self, product: WooProduct) -> list[CanonicalRecord]:
        start_date = parse_datetime(product.first_meta(START_DATE_KEYS))
        end_date = parse_datetime(product.first_meta(END_DATE_KEYS)) or start_date
        trainer = product.first_meta(TRAINER_KEYS) or self._trainers.from_sku(
            product.sku
        )
        return [
            CourseScheduleRecord(
                source_system=SOURCE,
                source_product_id=product.product_id,
                name=product.name,
                status=product.status,
                sku=product.sku,
                price=product.price,
                capacity=product.stock_quantity,
                start_date=start_date,
                end_date=end_date,
                format_type=product.first_meta(FORMAT_TYPE_KEYS),
                trainer_name=trainer,
            )
        ]
