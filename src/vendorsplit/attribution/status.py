from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import cast

from vendorsplit.attribution.vendors import SellerGroup
from vendorsplit.core.types import Status

# Higher rank dominates. Cancelled outranks everything.
STATUS_RANK: dict[Status, int] = {
    "pending": 0,
    "processing": 1,
    "confirmed": 2,
    "shipped": 3,
    "delivered": 4,
    "cancelled": 5,
}
DEFAULT_STATUS: Status = "pending"


@dataclass(frozen=True, slots=True)
class StatusReconciliation:
    per_seller: dict[str, Status]
    order: Status


def normalize_status(raw: str | None) -> Status:
    if raw is None:
        return DEFAULT_STATUS
    status = raw.strip().lower()
    if status in STATUS_RANK:
        return cast(Status, status)
    return DEFAULT_STATUS


def status_rank(raw: str | None) -> int:
    return STATUS_RANK[normalize_status(raw)]


def dominant_status(statuses: Iterable[str | None]) -> Status:
    dominant = DEFAULT_STATUS
    for raw in statuses:
        if status_rank(raw) > STATUS_RANK[dominant]:
            dominant = normalize_status(raw)
    return dominant


def reconcile_statuses(groups: Mapping[str, SellerGroup]) -> StatusReconciliation:
    """Dominant status per seller, from that seller's items only, and for the whole order.

    Statuses are read from the line items every time, never from an
    order-level field, so one seller's status update cannot change what
    another seller sees for the same order.
    """
    per_seller = {
        seller_id: dominant_status(item.status for item in group.items)
        for seller_id, group in groups.items()
    }
    order = dominant_status(
        item.status for group in groups.values() for item in group.items
    )
    return StatusReconciliation(per_seller=per_seller, order=order)
