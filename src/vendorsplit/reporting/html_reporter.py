from __future__ import annotations

import html

from vendorsplit.core.types import RevenueReport, SellerSummary, TimeBucket
from vendorsplit.model.interfaces import Reporter
from vendorsplit.reporting.schema import SCHEMA_VERSION
from vendorsplit.reporting.serialize import money


class HtmlReporter(Reporter):
    def write(self, report: RevenueReport, out_path: str) -> None:
        with open(out_path, "w", encoding="utf-8") as handle:
            handle.write(self.render(report))

    def render(self, report: RevenueReport) -> str:
        bucket_rows = "\n".join(_render_bucket(bucket) for bucket in report.buckets)
        seller_rows = "\n".join(_render_seller(summary) for summary in report.sellers)
        scope = html.escape(report.seller_id) if report.seller_id else "All sellers"
        stats = report.stats
        return f"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Vendor Revenue Report</title>
  <style>
    body {{ font-family: sans-serif; padding: 24px; }}
    table {{ border-collapse: collapse; margin-bottom: 24px; }}
    th, td {{ padding: 4px 10px; border: 1px solid #e5e5e5; text-align: right; }}
    th {{ background: #f3f3f3; }}
    td.key, td.label, td.seller {{ text-align: left; }}
    .meta {{ color: #444; font-size: 0.9em; }}
    .status-cancelled {{ color: #b00020; }}
    .status-delivered {{ color: #1b7a2f; }}
  </style>
</head>
<body>
  <h1>Vendor Revenue Report</h1>
  <p class="meta">Schema: {SCHEMA_VERSION} | Granularity: {report.granularity} | {scope}</p>
  <p class="meta">Orders: {stats.order_count} | Attributed: {stats.attributed_order_count}
    | Excluded (timestamp): {stats.excluded_timestamps}
    | Rejected items: {stats.rejected_items}</p>
  <h2>Revenue by period</h2>
  <table>
    <thead>
      <tr><th>Period</th><th>Label</th><th>Revenue</th><th>Platform fees</th>
        <th>Net revenue</th><th>Shipping</th><th>Orders</th></tr>
    </thead>
    <tbody>
      {bucket_rows}
    </tbody>
  </table>
  <h2>Sellers</h2>
  <table>
    <thead>
      <tr><th>Seller</th><th>Gross revenue</th><th>Shipping share</th><th>Platform fee</th>
        <th>Net revenue</th><th>Orders</th><th>Status</th></tr>
    </thead>
    <tbody>
      {seller_rows}
    </tbody>
  </table>
</body>
</html>
"""


def _render_bucket(bucket: TimeBucket) -> str:
    return (
        "<tr>"
        f'<td class="key">{html.escape(bucket.key)}</td>'
        f'<td class="label">{html.escape(bucket.label)}</td>'
        f"<td>{money(bucket.total_revenue):.2f}</td>"
        f"<td>{money(bucket.total_platform_fees):.2f}</td>"
        f"<td>{money(bucket.total_net_revenue):.2f}</td>"
        f"<td>{money(bucket.total_shipping_fees):.2f}</td>"
        f"<td>{bucket.order_count}</td>"
        "</tr>"
    )


def _render_seller(summary: SellerSummary) -> str:
    status = html.escape(summary.dominant_status)
    return (
        "<tr>"
        f'<td class="seller">{html.escape(summary.seller_id)}</td>'
        f"<td>{money(summary.gross_revenue):.2f}</td>"
        f"<td>{money(summary.shipping_fee_share):.2f}</td>"
        f"<td>{money(summary.platform_fee):.2f}</td>"
        f"<td>{money(summary.net_revenue):.2f}</td>"
        f"<td>{summary.order_count}</td>"
        f'<td class="status-{status}">{status}</td>'
        "</tr>"
    )
