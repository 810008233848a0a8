from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CommissionConfig:
    rate: Decimal = Decimal("0.05")


@dataclass(frozen=True, slots=True)
class ShippingConfig:
    # Destinations whose region or city contains this keyword get the lower flat fee.
    low_cost_region: str = "accra"
    low_cost_fee: Decimal = Decimal("40")
    standard_fee: Decimal = Decimal("70")
    tolerance: Decimal = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class AttributionConfig:
    unassigned_seller: str = "unassigned"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    processes: int = 1
    timeout_seconds: float = 30.0


@dataclass(frozen=True, slots=True)
class WindowConfig:
    daily_days: int = 7
    weekly_days: int = 28
    monthly_months: int = 6
    yearly_years: int = 3


@dataclass(frozen=True, slots=True)
class VendorSplitConfig:
    commission: CommissionConfig = CommissionConfig()
    shipping: ShippingConfig = ShippingConfig()
    attribution: AttributionConfig = AttributionConfig()
    runtime: RuntimeConfig = RuntimeConfig()
    windows: WindowConfig = WindowConfig()
