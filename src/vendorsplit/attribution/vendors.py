from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from vendorsplit.core.types import LineItem
from vendorsplit.normalize.fees import ZERO


@dataclass(frozen=True, slots=True)
class SellerGroup:
    seller_id: str
    items: tuple[LineItem, ...]
    gross_revenue: Decimal

    @property
    def item_count(self) -> int:
        return len(self.items)


def group_by_seller(items: Iterable[LineItem], unassigned: str) -> dict[str, SellerGroup]:
    """Partition line items by owning seller, keyed and ordered by seller id.

    Items without a seller land in the ``unassigned`` group so that the
    groups always add back up to the order's product subtotal.
    """
    grouped: dict[str, list[LineItem]] = defaultdict(list)
    for item in items:
        grouped[item.seller_id or unassigned].append(item)
    return {
        seller_id: SellerGroup(
            seller_id=seller_id,
            items=tuple(grouped[seller_id]),
            gross_revenue=product_subtotal(grouped[seller_id]),
        )
        for seller_id in sorted(grouped)
    }


def product_subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((item.total for item in items), ZERO)
