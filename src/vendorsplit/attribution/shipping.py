"""Apportion an order's shipping charge across its sellers.

Each seller's share comes from the first strategy in the chain that can
answer for it:

1. ``ExplicitFeeStrategy`` - a per-seller fee recorded on the order.
2. ``ProportionalFeeStrategy`` - the order's shipping fee split by the
   seller's share of product revenue.
3. ``DestinationDefaultStrategy`` - a flat fee chosen by destination.

Proportional shares are rounded to cents. When every seller of an order is
served by the proportional tier the rounding remainder goes to the seller
with the most revenue, so the shares add up to the order's fee exactly.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from vendorsplit.core.config import ShippingConfig
from vendorsplit.core.types import Destination, ShippingTier
from vendorsplit.model.interfaces import ShippingStrategy
from vendorsplit.normalize.fees import ZERO

CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class ShippingContext:
    total_fee: Decimal
    seller_fees: Mapping[str, Decimal]
    revenues: Mapping[str, Decimal]
    destination: Destination
    config: ShippingConfig

    @property
    def total_revenue(self) -> Decimal:
        return sum(self.revenues.values(), ZERO)


@dataclass(frozen=True, slots=True)
class ShippingShare:
    seller_id: str
    amount: Decimal
    tier: ShippingTier


class ExplicitFeeStrategy(ShippingStrategy):
    tier: ShippingTier = "explicit"

    def resolve(self, seller_id: str, context: ShippingContext) -> Decimal | None:
        return context.seller_fees.get(seller_id)


class ProportionalFeeStrategy(ShippingStrategy):
    tier: ShippingTier = "proportional"

    def resolve(self, seller_id: str, context: ShippingContext) -> Decimal | None:
        total_revenue = context.total_revenue
        if context.total_fee <= 0 or total_revenue <= 0:
            return None
        share = context.total_fee * context.revenues[seller_id] / total_revenue
        return share.quantize(CENT, rounding=ROUND_HALF_UP)


class DestinationDefaultStrategy(ShippingStrategy):
    tier: ShippingTier = "destination"

    def resolve(self, seller_id: str, context: ShippingContext) -> Decimal | None:
        if is_low_cost_destination(context.destination, context.config.low_cost_region):
            return context.config.low_cost_fee
        return context.config.standard_fee


DEFAULT_STRATEGIES: tuple[ShippingStrategy, ...] = (
    ExplicitFeeStrategy(),
    ProportionalFeeStrategy(),
    DestinationDefaultStrategy(),
)


def is_low_cost_destination(destination: Destination, keyword: str) -> bool:
    needle = keyword.strip().lower()
    if not needle:
        return False
    return needle in destination.region.lower() or needle in destination.city.lower()


def apportion_shipping(
    context: ShippingContext,
    strategies: Sequence[ShippingStrategy] = DEFAULT_STRATEGIES,
) -> dict[str, ShippingShare]:
    shares: dict[str, ShippingShare] = {}
    for seller_id in context.revenues:
        for strategy in strategies:
            amount = strategy.resolve(seller_id, context)
            if amount is not None:
                shares[seller_id] = ShippingShare(seller_id, amount, strategy.tier)
                break
    return _settle_rounding(shares, context)


def _settle_rounding(
    shares: dict[str, ShippingShare], context: ShippingContext
) -> dict[str, ShippingShare]:
    if not shares or any(share.tier != "proportional" for share in shares.values()):
        return shares
    remainder = context.total_fee - sum((share.amount for share in shares.values()), ZERO)
    if remainder == 0:
        return shares
    target = min(shares, key=lambda seller_id: (-context.revenues[seller_id], seller_id))
    adjusted = dict(shares)
    adjusted[target] = ShippingShare(target, shares[target].amount + remainder, "proportional")
    return adjusted


def shares_reconcile(shares: Mapping[str, ShippingShare], context: ShippingContext) -> bool:
    """True when the shares add back up to the order's shipping fee within tolerance.

    Only meaningful when no share came from the destination tier.
    """
    total = sum((share.amount for share in shares.values()), ZERO)
    return abs(total - context.total_fee) <= context.config.tolerance
