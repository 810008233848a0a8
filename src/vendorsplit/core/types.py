from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Literal

Status = Literal["pending", "processing", "confirmed", "shipped", "delivered", "cancelled"]
Granularity = Literal["daily", "weekly", "monthly", "yearly"]
ShippingTier = Literal["explicit", "proportional", "destination"]

GRANULARITIES: tuple[Granularity, ...] = ("daily", "weekly", "monthly", "yearly")
SHIPPING_TIERS: tuple[ShippingTier, ...] = ("explicit", "proportional", "destination")


@dataclass(frozen=True, slots=True)
class Destination:
    region: str = ""
    city: str = ""


@dataclass(frozen=True, slots=True)
class LineItem:
    seller_id: str | None
    unit_price: Decimal
    quantity: int
    status: str | None
    product_id: str | None = None

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True, slots=True)
class Order:
    id: str
    created_at: datetime | None
    destination: Destination
    total_amount: Decimal
    shipping_fee: Decimal
    seller_shipping_fees: Mapping[str, Decimal]
    items: tuple[LineItem, ...]
    rejected_items: int = 0


@dataclass(frozen=True, slots=True)
class RawSnapshot:
    records: list[Mapping[str, Any]]
    product_owners: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class SellerAttribution:
    seller_id: str
    gross_revenue: Decimal
    shipping_fee_share: Decimal
    platform_fee: Decimal
    net_revenue: Decimal
    item_count: int
    dominant_status: Status
    shipping_tier: ShippingTier


@dataclass(frozen=True, slots=True)
class OrderAttribution:
    order_id: str
    created_at: datetime | None
    subtotal: Decimal
    shipping_fee: Decimal
    sellers: tuple[SellerAttribution, ...]
    dominant_status: Status
    low_cost_destination: bool
    rejected_items: int = 0

    @property
    def seller_ids(self) -> tuple[str, ...]:
        return tuple(seller.seller_id for seller in self.sellers)


@dataclass(frozen=True, slots=True)
class SellerBreakdown:
    seller_id: str
    revenue: Decimal
    platform_fees: Decimal
    net_revenue: Decimal
    shipping_fees: Decimal
    order_count: int


@dataclass(frozen=True, slots=True)
class TimeBucket:
    key: str
    label: str
    start: date
    total_revenue: Decimal
    total_platform_fees: Decimal
    total_net_revenue: Decimal
    total_shipping_fees: Decimal
    order_count: int
    sellers: tuple[SellerBreakdown, ...] = ()

    @property
    def product_revenue(self) -> Decimal:
        return self.total_revenue

    @property
    def gross_with_shipping(self) -> Decimal:
        return self.total_revenue + self.total_shipping_fees


@dataclass(frozen=True, slots=True)
class SellerSummary:
    seller_id: str
    gross_revenue: Decimal
    shipping_fee_share: Decimal
    platform_fee: Decimal
    net_revenue: Decimal
    order_count: int
    item_count: int
    dominant_status: Status
    low_cost_orders: int
    standard_orders: int


@dataclass(frozen=True, slots=True)
class StatusOverlay:
    order_id: str
    seller_id: str
    dominant_status: Status


@dataclass(frozen=True, slots=True)
class ReportStats:
    order_count: int
    attributed_order_count: int
    excluded_timestamps: int
    outside_window: int
    rejected_items: int
    tier_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RevenueReport:
    granularity: Granularity
    seller_id: str | None
    window: tuple[datetime, datetime] | None
    buckets: list[TimeBucket]
    sellers: list[SellerSummary]
    overlay: list[StatusOverlay]
    stats: ReportStats
    timing: dict[str, float]


if TYPE_CHECKING:
    from vendorsplit.core.config import VendorSplitConfig


@dataclass(frozen=True, slots=True)
class ReportRequest:
    granularity: Granularity
    config: VendorSplitConfig
    seller_id: str | None = None
    window: tuple[datetime, datetime] | None = None
