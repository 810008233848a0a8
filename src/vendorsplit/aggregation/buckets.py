"""Fold per-order attributions into calendar buckets.

A ``BucketFold`` is a partial aggregate. Folds built over disjoint slices of
the same order set can be merged in any order with ``merge_folds``; the
totals are plain sums, so the merged result does not depend on how the
orders were split.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from vendorsplit.aggregation.periods import period_for
from vendorsplit.core.types import Granularity, OrderAttribution, SellerBreakdown, TimeBucket
from vendorsplit.normalize.fees import ZERO


@dataclass(frozen=True, slots=True)
class BucketTotals:
    key: str
    label: str
    start: date
    revenue: Decimal = ZERO
    platform_fees: Decimal = ZERO
    net_revenue: Decimal = ZERO
    shipping_fees: Decimal = ZERO
    order_count: int = 0
    sellers: Mapping[str, SellerBreakdown] = field(default_factory=dict)

    def plus(self, other: BucketTotals) -> BucketTotals:
        sellers = dict(self.sellers)
        for seller_id, breakdown in other.sellers.items():
            current = sellers.get(seller_id)
            sellers[seller_id] = breakdown if current is None else _add_breakdowns(current, breakdown)
        return BucketTotals(
            key=self.key,
            label=self.label,
            start=self.start,
            revenue=self.revenue + other.revenue,
            platform_fees=self.platform_fees + other.platform_fees,
            net_revenue=self.net_revenue + other.net_revenue,
            shipping_fees=self.shipping_fees + other.shipping_fees,
            order_count=self.order_count + other.order_count,
            sellers=sellers,
        )


@dataclass(frozen=True, slots=True)
class BucketFold:
    granularity: Granularity
    buckets: Mapping[str, BucketTotals] = field(default_factory=dict)
    excluded: int = 0


def fold_buckets(attributions: Iterable[OrderAttribution], granularity: Granularity) -> BucketFold:
    fold = BucketFold(granularity=granularity)
    for attribution in attributions:
        fold = merge_folds(fold, fold_order(attribution, granularity))
    return fold


def fold_order(attribution: OrderAttribution, granularity: Granularity) -> BucketFold:
    if attribution.created_at is None:
        return BucketFold(granularity=granularity, excluded=1)
    period = period_for(attribution.created_at, granularity)
    sellers = {
        seller.seller_id: SellerBreakdown(
            seller_id=seller.seller_id,
            revenue=seller.gross_revenue,
            platform_fees=seller.platform_fee,
            net_revenue=seller.net_revenue,
            shipping_fees=seller.shipping_fee_share,
            order_count=1,
        )
        for seller in attribution.sellers
    }
    totals = BucketTotals(
        key=period.key,
        label=period.label,
        start=period.start,
        revenue=sum((s.revenue for s in sellers.values()), ZERO),
        platform_fees=sum((s.platform_fees for s in sellers.values()), ZERO),
        net_revenue=sum((s.net_revenue for s in sellers.values()), ZERO),
        shipping_fees=sum((s.shipping_fees for s in sellers.values()), ZERO),
        order_count=1,
        sellers=sellers,
    )
    return BucketFold(granularity=granularity, buckets={period.key: totals})


def merge_folds(a: BucketFold, b: BucketFold) -> BucketFold:
    if a.granularity != b.granularity:
        raise ValueError(f"Cannot merge {a.granularity} and {b.granularity} folds")
    buckets = dict(a.buckets)
    for key, totals in b.buckets.items():
        current = buckets.get(key)
        buckets[key] = totals if current is None else current.plus(totals)
    return BucketFold(granularity=a.granularity, buckets=buckets, excluded=a.excluded + b.excluded)


def finish_buckets(fold: BucketFold) -> list[TimeBucket]:
    """Freeze a fold into ``TimeBucket``s, newest period first."""
    ordered = sorted(fold.buckets.values(), key=lambda totals: totals.start, reverse=True)
    return [
        TimeBucket(
            key=totals.key,
            label=totals.label,
            start=totals.start,
            total_revenue=totals.revenue,
            total_platform_fees=totals.platform_fees,
            total_net_revenue=totals.net_revenue,
            total_shipping_fees=totals.shipping_fees,
            order_count=totals.order_count,
            sellers=tuple(totals.sellers[seller_id] for seller_id in sorted(totals.sellers)),
        )
        for totals in ordered
    ]


def _add_breakdowns(a: SellerBreakdown, b: SellerBreakdown) -> SellerBreakdown:
    return SellerBreakdown(
        seller_id=a.seller_id,
        revenue=a.revenue + b.revenue,
        platform_fees=a.platform_fees + b.platform_fees,
        net_revenue=a.net_revenue + b.net_revenue,
        shipping_fees=a.shipping_fees + b.shipping_fees,
        order_count=a.order_count + b.order_count,
    )
