"""Translate raw order records into read-only ``Order`` values.

Two line-item schemas exist side by side. Modern orders carry ``items`` with
an explicit ``sellerId`` and a numeric ``unitPrice``; legacy orders carry
``cartItems`` keyed by ``productId`` with the price stored as text. When both
are populated the modern collection wins and the legacy one is ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from vendorsplit.core.logging import get_logger
from vendorsplit.core.types import Destination, LineItem, Order, RawSnapshot
from vendorsplit.normalize.fees import ZERO, NoFee, classify_fee, normalize_fee, parse_amount
from vendorsplit.normalize.timestamps import parse_timestamp

# Quantities at or above 10**16 are treated as overflow, like money amounts.
_MAX_QUANTITY_EXPONENT = 15

# Seller references written by older checkout code when the vendor was unknown.
_PLACEHOLDER_SELLERS = frozenset({"", "unknown", "shop seller", "null", "undefined"})


def read_snapshot(snapshot: RawSnapshot) -> list[Order]:
    return [read_order(record, snapshot.product_owners) for record in snapshot.records]


def read_order(record: Mapping[str, Any], product_owners: Mapping[str, str]) -> Order:
    order_id = str(_first(record, "id", "_id", default=""))
    raw_created = _first(record, "createdAt", "orderDate", "date")
    created_at = parse_timestamp(raw_created)
    if created_at is None:
        get_logger().warning("Order %s: unparseable creation timestamp %r", order_id, raw_created)

    items, rejected = _read_items(order_id, record, product_owners)
    return Order(
        id=order_id,
        created_at=created_at,
        destination=_read_destination(record),
        total_amount=parse_amount(record.get("totalAmount")) or ZERO,
        shipping_fee=normalize_fee(record.get("shippingFee")),
        seller_shipping_fees=_read_seller_fees(record),
        items=tuple(items),
        rejected_items=rejected,
    )


def _read_items(
    order_id: str, record: Mapping[str, Any], product_owners: Mapping[str, str]
) -> tuple[list[LineItem], int]:
    modern = _as_list(record.get("items"))
    legacy = _as_list(record.get("cartItems"))
    raw_items = modern if modern else legacy
    items: list[LineItem] = []
    rejected = 0
    for index, raw in enumerate(raw_items):
        item = _read_item(raw, product_owners)
        if item is None:
            rejected += 1
            get_logger().warning("Order %s: rejected line item %d: %r", order_id, index, raw)
            continue
        if item.seller_id is None:
            get_logger().debug(
                "Order %s: line item %d has no resolvable seller (product %s)",
                order_id,
                index,
                item.product_id,
            )
        items.append(item)
    return items, rejected


def _read_item(raw: Any, product_owners: Mapping[str, str]) -> LineItem | None:
    if not isinstance(raw, Mapping):
        return None
    price = parse_amount(_first(raw, "unitPrice", "price"))
    quantity = _parse_quantity(raw.get("quantity"))
    if price is None or quantity is None:
        return None
    product_id = _product_id(raw)
    status = raw.get("status")
    return LineItem(
        seller_id=_resolve_seller(raw, product_id, product_owners),
        unit_price=price,
        quantity=quantity,
        status=str(status).strip().lower() if status is not None else None,
        product_id=product_id,
    )


def _resolve_seller(
    raw: Mapping[str, Any], product_id: str | None, product_owners: Mapping[str, str]
) -> str | None:
    explicit = _clean_ref(_first(raw, "sellerId", "adminId"))
    if explicit is not None:
        return explicit
    product = raw.get("product")
    if isinstance(product, Mapping):
        owner = _clean_ref(product.get("createdBy"))
        if owner is not None:
            return owner
    if product_id is not None:
        return _clean_ref(product_owners.get(product_id))
    return None


def _product_id(raw: Mapping[str, Any]) -> str | None:
    ref = _first(raw, "productId", "product")
    if isinstance(ref, Mapping):
        ref = _first(ref, "_id", "id")
    return _clean_ref(ref)


def _clean_ref(ref: Any) -> str | None:
    if isinstance(ref, Mapping):
        ref = _first(ref, "_id", "id", "$oid")
        if isinstance(ref, Mapping):
            ref = ref.get("$oid")
    if ref is None or isinstance(ref, bool):
        return None
    text = str(ref).strip()
    if text.lower() in _PLACEHOLDER_SELLERS:
        return None
    return text


def _parse_quantity(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 1 or value.adjusted() > _MAX_QUANTITY_EXPONENT:
        return None
    if value != value.to_integral_value():
        return None
    return int(value)


def _read_destination(record: Mapping[str, Any]) -> Destination:
    raw = _first(record, "destination", "addressInfo", "shippingAddress")
    if not isinstance(raw, Mapping):
        return Destination()
    return Destination(
        region=str(raw.get("region") or ""),
        city=str(raw.get("city") or ""),
    )


def _read_seller_fees(record: Mapping[str, Any]) -> dict[str, Decimal]:
    raw = _first(record, "sellerShippingFees", "adminShippingFees")
    if not isinstance(raw, Mapping):
        return {}
    fees: dict[str, Decimal] = {}
    for seller_id, value in raw.items():
        if isinstance(classify_fee(value), NoFee):
            continue
        fees[str(seller_id)] = normalize_fee(value)
    return fees


def _first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        return list(value)
    return []
