from decimal import Decimal

from vendorsplit.attribution.status import (
    dominant_status,
    normalize_status,
    reconcile_statuses,
    status_rank,
)
from vendorsplit.attribution.vendors import group_by_seller
from vendorsplit.core.types import LineItem


def _item(seller: str, status: str | None) -> LineItem:
    return LineItem(seller_id=seller, unit_price=Decimal("1"), quantity=1, status=status)


def test_cancelled_dominates_regardless_of_position():
    assert dominant_status(["cancelled", "delivered", "shipped"]) == "cancelled"
    assert dominant_status(["pending", "delivered", "cancelled"]) == "cancelled"


def test_adding_cancelled_item_makes_order_cancelled():
    statuses = ["processing", "shipped", "delivered"]
    assert dominant_status(statuses) == "delivered"
    assert dominant_status([*statuses, "cancelled"]) == "cancelled"


def test_only_delivered_items_are_delivered():
    assert dominant_status(["delivered", "delivered"]) == "delivered"


def test_unknown_and_missing_default_to_pending():
    assert normalize_status("on-hold") == "pending"
    assert normalize_status(None) == "pending"
    assert normalize_status(" Shipped ") == "shipped"
    assert dominant_status([None, "bogus"]) == "pending"
    assert dominant_status([]) == "pending"
    assert status_rank("refunded") == status_rank("pending")


def test_per_seller_status_ignores_other_sellers():
    groups = group_by_seller(
        [_item("a", "delivered"), _item("b", "cancelled"), _item("a", "shipped")],
        "unassigned",
    )
    result = reconcile_statuses(groups)
    assert result.per_seller == {"a": "delivered", "b": "cancelled"}
    assert result.order == "cancelled"
