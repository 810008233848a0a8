from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from vendorsplit.core.types import (
    RevenueReport,
    SellerBreakdown,
    SellerSummary,
    StatusOverlay,
    TimeBucket,
)

CENT = Decimal("0.01")


def money(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def report_to_dict(report: RevenueReport) -> dict[str, object]:
    """Field names follow the camelCase shapes the dashboard layer consumes."""
    return {
        "granularity": report.granularity,
        "sellerId": report.seller_id,
        "window": (
            None
            if report.window is None
            else {"start": report.window[0].isoformat(), "end": report.window[1].isoformat()}
        ),
        "buckets": [bucket_to_dict(bucket) for bucket in report.buckets],
        "sellers": [seller_summary_to_dict(summary) for summary in report.sellers],
        "overlay": [overlay_to_dict(row) for row in report.overlay],
        "diagnostics": {
            "orderCount": report.stats.order_count,
            "attributedOrderCount": report.stats.attributed_order_count,
            "excludedTimestamps": report.stats.excluded_timestamps,
            "outsideWindow": report.stats.outside_window,
            "rejectedItems": report.stats.rejected_items,
            "shippingTiers": report.stats.tier_counts,
        },
    }


def bucket_to_dict(bucket: TimeBucket) -> dict[str, object]:
    return {
        "key": bucket.key,
        "label": bucket.label,
        "totalRevenue": money(bucket.total_revenue),
        "totalPlatformFees": money(bucket.total_platform_fees),
        "totalNetRevenue": money(bucket.total_net_revenue),
        "totalShippingFees": money(bucket.total_shipping_fees),
        "productRevenue": money(bucket.product_revenue),
        "grossWithShipping": money(bucket.gross_with_shipping),
        "orderCount": bucket.order_count,
        "sellers": [_breakdown_to_dict(row) for row in bucket.sellers],
    }


def _breakdown_to_dict(row: SellerBreakdown) -> dict[str, object]:
    return {
        "sellerId": row.seller_id,
        "revenue": money(row.revenue),
        "platformFees": money(row.platform_fees),
        "netRevenue": money(row.net_revenue),
        "shippingFees": money(row.shipping_fees),
        "orderCount": row.order_count,
    }


def seller_summary_to_dict(summary: SellerSummary) -> dict[str, object]:
    return {
        "sellerId": summary.seller_id,
        "grossRevenue": money(summary.gross_revenue),
        "shippingFeeShare": money(summary.shipping_fee_share),
        "platformFee": money(summary.platform_fee),
        "netRevenue": money(summary.net_revenue),
        "orderCount": summary.order_count,
        "itemCount": summary.item_count,
        "dominantStatus": summary.dominant_status,
        "shippingByRegion": {
            "lowCost": summary.low_cost_orders,
            "standard": summary.standard_orders,
        },
    }


def overlay_to_dict(row: StatusOverlay) -> dict[str, object]:
    return {"orderId": row.order_id, "sellerId": row.seller_id, "dominantStatus": row.dominant_status}
