from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vendorsplit.core.errors import SnapshotUnavailable
from vendorsplit.core.types import RawSnapshot
from vendorsplit.model.interfaces import SnapshotSource


class JsonSnapshotSource(SnapshotSource):
    """Reads ``{"orders": [...], "products": ...}`` (or a bare order list) from a JSON file."""

    def __init__(self, path: str) -> None:
        self._path = Path(path)

    def load(self) -> RawSnapshot:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SnapshotUnavailable(f"Cannot read snapshot {self._path}: {exc}") from exc
        except ValueError as exc:
            raise SnapshotUnavailable(f"Snapshot {self._path} is not valid JSON: {exc}") from exc
        return parse_snapshot(payload, str(self._path))


@dataclass(frozen=True, slots=True)
class InMemorySnapshotSource(SnapshotSource):
    records: list[Mapping[str, Any]]
    products: Any = field(default_factory=dict)

    def load(self) -> RawSnapshot:
        return parse_snapshot({"orders": self.records, "products": self.products}, "<memory>")


def parse_snapshot(payload: Any, origin: str) -> RawSnapshot:
    if isinstance(payload, list):
        orders: Any = payload
        products: Any = {}
    elif isinstance(payload, Mapping):
        orders = payload.get("orders")
        products = payload.get("products") or {}
    else:
        raise SnapshotUnavailable(f"Snapshot {origin} must be an object or a list of orders")
    if not isinstance(orders, list) or not all(isinstance(o, Mapping) for o in orders):
        raise SnapshotUnavailable(f"Snapshot {origin} has no list of order records")
    return RawSnapshot(records=orders, product_owners=_product_owners(products, origin))


def _product_owners(products: Any, origin: str) -> dict[str, str]:
    if isinstance(products, Mapping):
        return {str(k): str(v) for k, v in products.items() if v is not None}
    if not isinstance(products, list):
        raise SnapshotUnavailable(f"Snapshot {origin} has an unreadable product map")
    owners: dict[str, str] = {}
    for product in products:
        if not isinstance(product, Mapping):
            continue
        product_id = product.get("_id") or product.get("id")
        owner = product.get("sellerId") or product.get("createdBy")
        if isinstance(owner, Mapping):
            owner = owner.get("_id") or owner.get("id")
        if product_id is None or owner is None:
            continue
        owners[str(product_id)] = str(owner)
    return owners
