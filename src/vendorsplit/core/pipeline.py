from __future__ import annotations

import time
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from multiprocessing import TimeoutError as PoolTimeoutError
from multiprocessing import get_context

from tqdm import tqdm

from vendorsplit.aggregation.buckets import BucketFold, finish_buckets, fold_buckets, merge_folds
from vendorsplit.aggregation.periods import in_window
from vendorsplit.aggregation.sellers import restrict_to_seller, status_overlay, summarize_sellers
from vendorsplit.attribution.order import attribute_order
from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.config_loader import validate_config
from vendorsplit.core.errors import InvalidRequest, ReportTimeout
from vendorsplit.core.logging import get_logger
from vendorsplit.core.types import (
    GRANULARITIES,
    SHIPPING_TIERS,
    Granularity,
    Order,
    OrderAttribution,
    ReportRequest,
    ReportStats,
    RevenueReport,
)
from vendorsplit.model.interfaces import SnapshotSource
from vendorsplit.normalize.orders import read_snapshot
from vendorsplit.normalize.timestamps import parse_timestamp

Window = tuple[datetime, datetime]


@dataclass(frozen=True, slots=True)
class _ChunkResult:
    attributions: list[OrderAttribution]
    fold: BucketFold
    excluded: int
    outside_window: int
    rejected_items: int


WorkerArgs = tuple[list[Order], VendorSplitConfig, Granularity, str | None, Window | None]


def report_from_source(
    source: SnapshotSource, request: ReportRequest, progress: bool = False
) -> RevenueReport:
    """Load a snapshot from ``source`` and build the report for ``request``.

    ``SnapshotUnavailable`` from the source is the only error that is not
    recovered along the way.
    """
    start = time.perf_counter()
    snapshot = source.load()
    orders = read_snapshot(snapshot)
    load_time = time.perf_counter() - start
    report = run_report(orders, request, progress=progress)
    return replace(report, timing={"load": load_time, **report.timing})


def run_report(
    orders: Sequence[Order], request: ReportRequest, progress: bool = False
) -> RevenueReport:
    config = request.config
    validate_config(config)
    if request.granularity not in GRANULARITIES:
        raise InvalidRequest(f"Unknown granularity: {request.granularity}")
    window = _normalize_window(request.window)
    timeout = config.runtime.timeout_seconds
    deadline = time.monotonic() + timeout if timeout > 0 else None

    timing: dict[str, float] = {}
    start = time.perf_counter()
    if config.runtime.processes <= 1 or len(orders) <= 1:
        chunk = _process_orders(
            list(orders),
            config,
            request.granularity,
            request.seller_id,
            window,
            progress=progress,
            deadline=deadline,
        )
    else:
        chunk = _process_in_pool(
            list(orders), config, request.granularity, request.seller_id, window, progress, deadline
        )
    timing["attribute"] = time.perf_counter() - start

    start = time.perf_counter()
    buckets = finish_buckets(chunk.fold)
    sellers = summarize_sellers(chunk.attributions, request.seller_id)
    overlay = status_overlay(chunk.attributions, request.seller_id)
    timing["aggregate"] = time.perf_counter() - start

    excluded = chunk.excluded + chunk.fold.excluded
    if excluded:
        get_logger().warning("%d order(s) excluded for unparseable timestamps", excluded)
    tiers = Counter(seller.shipping_tier for a in chunk.attributions for seller in a.sellers)
    stats = ReportStats(
        order_count=len(orders),
        attributed_order_count=len(chunk.attributions),
        excluded_timestamps=excluded,
        outside_window=chunk.outside_window,
        rejected_items=chunk.rejected_items,
        tier_counts={tier: tiers[tier] for tier in SHIPPING_TIERS},
    )
    return RevenueReport(
        granularity=request.granularity,
        seller_id=request.seller_id,
        window=window,
        buckets=buckets,
        sellers=sellers,
        overlay=overlay,
        stats=stats,
        timing=timing,
    )


def _process_orders(
    orders: list[Order],
    config: VendorSplitConfig,
    granularity: Granularity,
    seller_id: str | None,
    window: Window | None,
    progress: bool = False,
    deadline: float | None = None,
) -> _ChunkResult:
    kept: list[OrderAttribution] = []
    excluded = 0
    outside = 0
    rejected = 0
    for order in tqdm(orders, desc="Attribute orders", unit="order", disable=not progress):
        if deadline is not None and time.monotonic() > deadline:
            raise ReportTimeout(f"Report exceeded {config.runtime.timeout_seconds}s")
        attribution: OrderAttribution | None = attribute_order(order, config)
        rejected += order.rejected_items
        if seller_id is not None:
            attribution = restrict_to_seller(attribution, seller_id)
            if attribution is None:
                continue
        if window is not None:
            if attribution.created_at is None:
                excluded += 1
                continue
            if not in_window(attribution.created_at, window):
                outside += 1
                continue
        kept.append(attribution)
    return _ChunkResult(
        attributions=kept,
        fold=fold_buckets(kept, granularity),
        excluded=excluded,
        outside_window=outside,
        rejected_items=rejected,
    )


def _process_in_pool(
    orders: list[Order],
    config: VendorSplitConfig,
    granularity: Granularity,
    seller_id: str | None,
    window: Window | None,
    progress: bool,
    deadline: float | None,
) -> _ChunkResult:
    processes = min(config.runtime.processes, len(orders))
    chunk_size = (len(orders) + processes - 1) // processes
    args: list[WorkerArgs] = [
        (orders[start : start + chunk_size], config, granularity, seller_id, window)
        for start in range(0, len(orders), chunk_size)
    ]
    parts: list[_ChunkResult] = []
    ctx = get_context("spawn")
    with ctx.Pool(processes=processes) as pool:
        results = pool.imap(_worker_process, args)
        with tqdm(total=len(orders), desc="Attribute orders", unit="order", disable=not progress) as bar:
            for chunk_args in args:
                remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                try:
                    part = results.next(timeout=remaining)
                except PoolTimeoutError as exc:
                    raise ReportTimeout(
                        f"Report exceeded {config.runtime.timeout_seconds}s"
                    ) from exc
                bar.update(len(chunk_args[0]))
                parts.append(part)
    return _merge_chunks(parts, granularity)


def _worker_process(args: WorkerArgs) -> _ChunkResult:
    orders, config, granularity, seller_id, window = args
    return _process_orders(orders, config, granularity, seller_id, window)


def _merge_chunks(parts: list[_ChunkResult], granularity: Granularity) -> _ChunkResult:
    fold = BucketFold(granularity=granularity)
    attributions: list[OrderAttribution] = []
    for part in parts:
        fold = merge_folds(fold, part.fold)
        attributions.extend(part.attributions)
    return _ChunkResult(
        attributions=attributions,
        fold=fold,
        excluded=sum(part.excluded for part in parts),
        outside_window=sum(part.outside_window for part in parts),
        rejected_items=sum(part.rejected_items for part in parts),
    )


def _normalize_window(window: Window | None) -> Window | None:
    if window is None:
        return None
    start, end = (parse_timestamp(value) for value in window)
    if start is None or end is None:
        raise InvalidRequest(f"Invalid report window: {window!r}")
    if start > end:
        raise InvalidRequest("Report window start must not be after its end")
    return start, end
