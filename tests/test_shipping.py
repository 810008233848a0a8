from decimal import Decimal

from vendorsplit.attribution.shipping import (
    ProportionalFeeStrategy,
    ShippingContext,
    apportion_shipping,
    is_low_cost_destination,
    shares_reconcile,
)
from vendorsplit.core.config import ShippingConfig
from vendorsplit.core.types import Destination

ACCRA = Destination(region="Greater Accra", city="Accra")
KUMASI = Destination(region="Ashanti", city="Kumasi")


def _context(
    total_fee: str,
    revenues: dict[str, str],
    seller_fees: dict[str, str] | None = None,
    destination: Destination = KUMASI,
) -> ShippingContext:
    return ShippingContext(
        total_fee=Decimal(total_fee),
        seller_fees={k: Decimal(v) for k, v in (seller_fees or {}).items()},
        revenues={k: Decimal(v) for k, v in revenues.items()},
        destination=destination,
        config=ShippingConfig(),
    )


def test_proportional_split_by_revenue_share():
    context = _context("40", {"A": "150", "B": "50"})
    shares = apportion_shipping(context)
    assert shares["A"].amount == Decimal("30")
    assert shares["B"].amount == Decimal("10")
    assert {share.tier for share in shares.values()} == {"proportional"}


def test_explicit_fee_wins_over_proportional():
    context = _context("70", {"A": "100", "B": "100"}, seller_fees={"A": "45"})
    shares = apportion_shipping(context)
    assert shares["A"].amount == Decimal("45")
    assert shares["A"].tier == "explicit"
    assert shares["B"].amount == Decimal("35.00")
    assert shares["B"].tier == "proportional"


def test_explicit_zero_is_still_explicit():
    shares = apportion_shipping(_context("0", {"A": "10"}, seller_fees={"A": "0"}))
    assert shares["A"].amount == Decimal("0")
    assert shares["A"].tier == "explicit"


def test_rounding_remainder_goes_to_largest_seller():
    context = _context("10", {"A": "1", "B": "1", "C": "1"})
    shares = apportion_shipping(context)
    amounts = {seller: share.amount for seller, share in shares.items()}
    assert amounts == {"A": Decimal("3.34"), "B": Decimal("3.33"), "C": Decimal("3.33")}
    assert sum(amounts.values()) == Decimal("10")
    assert shares_reconcile(shares, context)


def test_uneven_split_conserves_total():
    context = _context("37.77", {"A": "13", "B": "29.5", "C": "101.01", "D": "0.5"})
    shares = apportion_shipping(context)
    assert sum(share.amount for share in shares.values()) == Decimal("37.77")


def test_zero_revenue_falls_through_to_destination_default():
    shares = apportion_shipping(_context("40", {"A": "0", "B": "0"}))
    assert shares["A"].tier == "destination"
    assert shares["A"].amount == Decimal("70")
    assert shares["B"].amount == Decimal("70")


def test_no_shipping_fee_uses_destination_tiers():
    accra = apportion_shipping(_context("0", {"A": "10", "B": "20"}, destination=ACCRA))
    assert [share.amount for share in accra.values()] == [Decimal("40"), Decimal("40")]
    kumasi = apportion_shipping(_context("0", {"A": "10"}))
    assert kumasi["A"].amount == Decimal("70")


def test_low_cost_match_on_city_or_region():
    assert is_low_cost_destination(Destination(region="", city="ACCRA Central"), "accra")
    assert is_low_cost_destination(Destination(region="Greater Accra", city=""), "Accra")
    assert not is_low_cost_destination(KUMASI, "accra")
    assert not is_low_cost_destination(ACCRA, "")


def test_single_seller_receives_full_fee():
    shares = apportion_shipping(_context("33.33", {"only": "12"}))
    assert shares["only"].amount == Decimal("33.33")


def test_empty_order_has_no_shares():
    assert apportion_shipping(_context("40", {})) == {}


def test_proportional_strategy_declines_without_fee():
    assert ProportionalFeeStrategy().resolve("A", _context("0", {"A": "10"})) is None
