from datetime import datetime, timezone

import pytest

from vendorsplit.cli.commands.report import ReportOptions, resolve_window
from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.errors import InvalidRequest

NOW = datetime(2024, 8, 31, 12, tzinfo=timezone.utc)


def test_timeseries_uses_default_lookback():
    window = resolve_window(ReportOptions(snapshot="s.json"), "daily", VendorSplitConfig(), NOW)
    assert window == (datetime(2024, 8, 24, 12, tzinfo=timezone.utc), NOW)


def test_all_time_commands_have_no_window():
    options = ReportOptions(snapshot="s.json", default_window=False)
    assert resolve_window(options, "daily", VendorSplitConfig(), NOW) is None


def test_until_only_starts_at_the_beginning_for_all_time_commands():
    options = ReportOptions(snapshot="s.json", until="2024-03-31", default_window=False)
    start, end = resolve_window(options, "daily", VendorSplitConfig(), NOW)
    assert start == datetime.min.replace(tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 31, tzinfo=timezone.utc)


def test_bad_bound_is_a_request_error():
    options = ReportOptions(snapshot="s.json", since="yesterday")
    with pytest.raises(InvalidRequest):
        resolve_window(options, "daily", VendorSplitConfig(), NOW)
