from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import replace

from vendorsplit.attribution.status import dominant_status
from vendorsplit.core.types import (
    OrderAttribution,
    SellerAttribution,
    SellerSummary,
    StatusOverlay,
)
from vendorsplit.normalize.fees import ZERO


def restrict_to_seller(attribution: OrderAttribution, seller_id: str) -> OrderAttribution | None:
    """The seller's view of an order, or ``None`` when it has no items from the seller."""
    if seller_id not in attribution.seller_ids:
        return None
    sellers = tuple(s for s in attribution.sellers if s.seller_id == seller_id)
    return replace(
        attribution,
        sellers=sellers,
        subtotal=sellers[0].gross_revenue,
        dominant_status=sellers[0].dominant_status,
    )


def summarize_sellers(
    attributions: Iterable[OrderAttribution], seller_id: str | None = None
) -> list[SellerSummary]:
    by_seller: dict[str, list[tuple[OrderAttribution, SellerAttribution]]] = defaultdict(list)
    for attribution in attributions:
        for seller in attribution.sellers:
            if seller_id is not None and seller.seller_id != seller_id:
                continue
            by_seller[seller.seller_id].append((attribution, seller))
    return [_summarize(sid, by_seller[sid]) for sid in sorted(by_seller)]


def _summarize(
    seller_id: str, rows: list[tuple[OrderAttribution, SellerAttribution]]
) -> SellerSummary:
    sellers = [seller for _order, seller in rows]
    low_cost = sum(1 for order, _seller in rows if order.low_cost_destination)
    return SellerSummary(
        seller_id=seller_id,
        gross_revenue=sum((s.gross_revenue for s in sellers), ZERO),
        shipping_fee_share=sum((s.shipping_fee_share for s in sellers), ZERO),
        platform_fee=sum((s.platform_fee for s in sellers), ZERO),
        net_revenue=sum((s.net_revenue for s in sellers), ZERO),
        order_count=len(rows),
        item_count=sum(s.item_count for s in sellers),
        dominant_status=dominant_status(s.dominant_status for s in sellers),
        low_cost_orders=low_cost,
        standard_orders=len(rows) - low_cost,
    )


def status_overlay(
    attributions: Iterable[OrderAttribution], seller_id: str | None = None
) -> list[StatusOverlay]:
    rows: list[StatusOverlay] = []
    for attribution in attributions:
        for seller in attribution.sellers:
            if seller_id is not None and seller.seller_id != seller_id:
                continue
            rows.append(
                StatusOverlay(
                    order_id=attribution.order_id,
                    seller_id=seller.seller_id,
                    dominant_status=seller.dominant_status,
                )
            )
    return rows
