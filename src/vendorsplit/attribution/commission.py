from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Commission:
    gross_revenue: Decimal
    platform_fee: Decimal
    net_revenue: Decimal


def apply_commission(gross_revenue: Decimal, rate: Decimal) -> Commission:
    # The base is the seller's product revenue only; shipping is never commissioned.
    platform_fee = gross_revenue * rate
    return Commission(
        gross_revenue=gross_revenue,
        platform_fee=platform_fee,
        net_revenue=gross_revenue - platform_fee,
    )
