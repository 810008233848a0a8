from decimal import Decimal

from vendorsplit.attribution.vendors import group_by_seller, product_subtotal
from vendorsplit.core.types import LineItem


def _item(seller: str | None, price: str, quantity: int = 1) -> LineItem:
    return LineItem(seller_id=seller, unit_price=Decimal(price), quantity=quantity, status=None)


def test_groups_sum_back_to_subtotal():
    items = [
        _item("b", "19.99", 3),
        _item("a", "5.25", 2),
        _item(None, "7", 1),
        _item("b", "0.01", 7),
    ]
    groups = group_by_seller(items, "unassigned")
    assert list(groups) == ["a", "b", "unassigned"]
    assert groups["b"].gross_revenue == Decimal("60.04")
    assert groups["b"].item_count == 2
    total = sum((g.gross_revenue for g in groups.values()), Decimal("0"))
    assert total == product_subtotal(items) == Decimal("77.54")


def test_items_without_seller_are_kept_under_sentinel():
    groups = group_by_seller([_item(None, "10"), _item("", "5")], "nobody")
    assert list(groups) == ["nobody"]
    assert groups["nobody"].gross_revenue == Decimal("15")


def test_no_items_gives_no_groups():
    assert group_by_seller([], "unassigned") == {}
    assert product_subtotal([]) == Decimal("0")
