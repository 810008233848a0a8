from __future__ import annotations

import argparse
import sys

from vendorsplit.cli.commands.report import ReportOptions, run_overlay, run_sellers, run_timeseries
from vendorsplit.core.errors import VendorSplitError
from vendorsplit.core.types import GRANULARITIES


def _add_common(parser: argparse.ArgumentParser, window_help: str) -> None:
    parser.add_argument("snapshot", help="Order snapshot location (a JSON file for --source json)")
    parser.add_argument("--source", default="json")
    parser.add_argument("--seller", default=None, help="Restrict to one seller id")
    parser.add_argument("--granularity", choices=GRANULARITIES, default="daily")
    parser.add_argument("--out", default=None)
    parser.add_argument("--all-time", action="store_true", help=window_help)
    parser.add_argument("--since", default=None, help="Window start (ISO date/time)")
    parser.add_argument("--until", default=None, help="Window end (ISO date/time)")
    parser.add_argument("--processes", type=int, default=None)
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument("--low-cost-region", default=None)
    parser.add_argument("--progress", action="store_true")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vendorsplit")
    sub = parser.add_subparsers(dest="command", required=True)

    timeseries = sub.add_parser("timeseries", help="Revenue rolled up by day/week/month/year")
    _add_common(
        timeseries,
        "Ignore the default lookback window (7 days daily, 28 weekly, 6 months monthly, 3 years yearly)",
    )
    timeseries.add_argument("--format", choices=["json", "html"], default="json")

    sellers = sub.add_parser("sellers", help="Per-seller revenue summary")
    _add_common(sellers, "Covers all time by default; kept for symmetry with timeseries")

    overlay = sub.add_parser("overlay", help="Per-seller dominant status for each order")
    _add_common(overlay, "Covers all time by default; kept for symmetry with timeseries")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    options = ReportOptions(
        snapshot=args.snapshot,
        source=args.source,
        granularity=args.granularity,
        seller=args.seller,
        fmt=getattr(args, "format", "json"),
        out_path=args.out,
        all_time=args.all_time,
        since=args.since,
        until=args.until,
        processes=args.processes,
        timeout=args.timeout,
        low_cost_region=args.low_cost_region,
        progress=args.progress,
        default_window=args.command == "timeseries",
    )
    try:
        if args.command == "timeseries":
            run_timeseries(options)
        elif args.command == "sellers":
            run_sellers(options)
        elif args.command == "overlay":
            run_overlay(options)
    except VendorSplitError as exc:
        print(f"vendorsplit: error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
