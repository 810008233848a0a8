from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import cast

from vendorsplit.aggregation.periods import reporting_window
from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.config_loader import load_config
from vendorsplit.core.errors import InvalidRequest
from vendorsplit.core.pipeline import report_from_source
from vendorsplit.core.types import Granularity, ReportRequest, RevenueReport
from vendorsplit.model.registry import get_source
from vendorsplit.normalize.timestamps import parse_timestamp
from vendorsplit.reporting.html_reporter import HtmlReporter
from vendorsplit.reporting.json_reporter import JsonReporter
from vendorsplit.reporting.serialize import overlay_to_dict, seller_summary_to_dict


@dataclass(frozen=True, slots=True)
class ReportOptions:
    snapshot: str
    source: str = "json"
    granularity: str = "daily"
    seller: str | None = None
    fmt: str = "json"
    out_path: str | None = None
    all_time: bool = False
    since: str | None = None
    until: str | None = None
    processes: int | None = None
    timeout: float | None = None
    low_cost_region: str | None = None
    progress: bool = False
    # False for commands that cover all time unless --since/--until is given.
    default_window: bool = True


def run_timeseries(options: ReportOptions) -> None:
    report = _build_report(options)
    if options.fmt == "html":
        HtmlReporter().write(report, options.out_path or "vendorsplit_report.html")
        return
    reporter = JsonReporter()
    if options.out_path:
        reporter.write(report, options.out_path)
    else:
        sys.stdout.write(reporter.render(report) + "\n")


def run_sellers(options: ReportOptions) -> None:
    report = _build_report(options)
    _emit([seller_summary_to_dict(summary) for summary in report.sellers], options.out_path)


def run_overlay(options: ReportOptions) -> None:
    report = _build_report(options)
    _emit([overlay_to_dict(row) for row in report.overlay], options.out_path)


def _build_report(options: ReportOptions) -> RevenueReport:
    __import__("vendorsplit.io")

    config = load_config(Path.cwd(), _overrides(options))
    granularity = cast(Granularity, options.granularity)
    request = ReportRequest(
        granularity=granularity,
        config=config,
        seller_id=options.seller,
        window=resolve_window(options, granularity, config, datetime.now(timezone.utc)),
    )
    source = get_source(options.source, options.snapshot)
    return report_from_source(source, request, progress=options.progress)


def resolve_window(
    options: ReportOptions, granularity: Granularity, config: VendorSplitConfig, now: datetime
) -> tuple[datetime, datetime] | None:
    if options.all_time:
        return None
    if options.since is None and options.until is None:
        if not options.default_window:
            return None
        return reporting_window(granularity, now, config.windows)
    if options.default_window:
        default_start, _ = reporting_window(granularity, now, config.windows)
    else:
        default_start = datetime.min.replace(tzinfo=timezone.utc)
    start = _parse_bound(options.since, "--since") if options.since else default_start
    end = _parse_bound(options.until, "--until") if options.until else now
    return start, end


def _parse_bound(value: str, flag: str) -> datetime:
    parsed = parse_timestamp(value)
    if parsed is None:
        raise InvalidRequest(f"{flag} is not an ISO date/time: {value!r}")
    return parsed


def _overrides(options: ReportOptions) -> dict[str, object]:
    overrides: dict[str, object] = {}
    runtime: dict[str, object] = {}
    if options.processes is not None:
        runtime["processes"] = options.processes
    if options.timeout is not None:
        runtime["timeout_seconds"] = options.timeout
    if runtime:
        overrides["runtime"] = runtime
    if options.low_cost_region is not None:
        overrides["shipping"] = {"low_cost_region": options.low_cost_region}
    return overrides


def _emit(rows: list[dict[str, object]], out_path: str | None) -> None:
    text = json.dumps(rows, indent=2)
    if out_path:
        Path(out_path).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text + "\n")
