from __future__ import annotations

from vendorsplit.attribution.commission import apply_commission
from vendorsplit.attribution.shipping import (
    ShippingContext,
    apportion_shipping,
    is_low_cost_destination,
    shares_reconcile,
)
from vendorsplit.attribution.status import reconcile_statuses
from vendorsplit.attribution.vendors import group_by_seller, product_subtotal
from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.logging import get_logger
from vendorsplit.core.types import Order, OrderAttribution, SellerAttribution


def attribute_order(order: Order, config: VendorSplitConfig) -> OrderAttribution:
    groups = group_by_seller(order.items, config.attribution.unassigned_seller)
    context = ShippingContext(
        total_fee=order.shipping_fee,
        seller_fees=order.seller_shipping_fees,
        revenues={seller_id: group.gross_revenue for seller_id, group in groups.items()},
        destination=order.destination,
        config=config.shipping,
    )
    shares = apportion_shipping(context)
    explicit_or_split = all(share.tier != "destination" for share in shares.values())
    if shares and explicit_or_split and not shares_reconcile(shares, context):
        get_logger().warning(
            "Order %s: seller shipping shares do not add up to the order fee %s",
            order.id,
            order.shipping_fee,
        )
    statuses = reconcile_statuses(groups)

    sellers: list[SellerAttribution] = []
    for seller_id, group in groups.items():
        commission = apply_commission(group.gross_revenue, config.commission.rate)
        share = shares[seller_id]
        if share.tier == "destination":
            get_logger().debug(
                "Order %s: seller %s shipping from destination default (%s)",
                order.id,
                seller_id,
                share.amount,
            )
        sellers.append(
            SellerAttribution(
                seller_id=seller_id,
                gross_revenue=commission.gross_revenue,
                shipping_fee_share=share.amount,
                platform_fee=commission.platform_fee,
                net_revenue=commission.net_revenue,
                item_count=group.item_count,
                dominant_status=statuses.per_seller[seller_id],
                shipping_tier=share.tier,
            )
        )

    return OrderAttribution(
        order_id=order.id,
        created_at=order.created_at,
        subtotal=product_subtotal(order.items),
        shipping_fee=order.shipping_fee,
        sellers=tuple(sellers),
        dominant_status=statuses.order,
        low_cost_destination=is_low_cost_destination(
            order.destination, config.shipping.low_cost_region
        ),
        rejected_items=order.rejected_items,
    )
