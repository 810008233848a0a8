from datetime import date, datetime, timezone

from vendorsplit.aggregation.periods import in_window, period_for, reporting_window
from vendorsplit.core.config import WindowConfig


def _at(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def test_daily_key_and_label():
    period = period_for(_at(2024, 3, 11), "daily")
    assert period.key == "2024-03-11"
    assert period.label == "Mar 11, 2024"
    assert period.start == date(2024, 3, 11)


def test_weekly_key_uses_iso_weeks():
    monday = period_for(_at(2024, 3, 11), "weekly")
    thursday = period_for(_at(2024, 3, 14), "weekly")
    assert monday.key == thursday.key == "2024-W11"
    assert monday.label == "Mar 11 - Mar 17, 2024"
    assert monday.start == date(2024, 3, 11)
    sunday = period_for(_at(2024, 3, 17, 23), "weekly")
    assert sunday.key == "2024-W11"


def test_weekly_year_boundary():
    assert period_for(_at(2024, 12, 30), "weekly").key == "2025-W1"
    assert period_for(_at(2021, 1, 1), "weekly").key == "2020-W53"


def test_monthly_and_yearly_keys():
    monthly = period_for(_at(2024, 3, 31), "monthly")
    assert monthly.key == "2024-3"
    assert monthly.label == "March 2024"
    assert monthly.start == date(2024, 3, 1)
    yearly = period_for(_at(2024, 7, 4), "yearly")
    assert (yearly.key, yearly.label, yearly.start) == ("2024", "2024", date(2024, 1, 1))


def test_default_reporting_windows():
    now = _at(2024, 8, 31)
    windows = WindowConfig()
    assert reporting_window("daily", now, windows)[0] == _at(2024, 8, 24)
    assert reporting_window("weekly", now, windows)[0] == _at(2024, 8, 3)
    assert reporting_window("monthly", now, windows)[0] == _at(2024, 2, 29)
    assert reporting_window("yearly", now, windows)[0] == _at(2021, 8, 31)


def test_in_window_is_inclusive():
    window = (_at(2024, 3, 1), _at(2024, 3, 31))
    assert in_window(_at(2024, 3, 1), window)
    assert in_window(_at(2024, 3, 31), window)
    assert not in_window(_at(2024, 4, 1), window)
