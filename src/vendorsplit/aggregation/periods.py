from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from vendorsplit.core.config import WindowConfig
from vendorsplit.core.types import Granularity


@dataclass(frozen=True, slots=True)
class Period:
    key: str
    label: str
    start: date


def period_for(timestamp: datetime, granularity: Granularity) -> Period:
    day = timestamp.astimezone(timezone.utc).date() if timestamp.tzinfo else timestamp.date()
    if granularity == "daily":
        return Period(key=day.isoformat(), label=_day_label(day), start=day)
    if granularity == "weekly":
        # Week-numbering year, so late-December days in week 1 stay with the next year.
        iso_year, iso_week, iso_weekday = day.isocalendar()
        monday = day - timedelta(days=iso_weekday - 1)
        sunday = monday + timedelta(days=6)
        label = f"{monday:%b} {monday.day} - {sunday:%b} {sunday.day}, {sunday.year}"
        return Period(key=f"{iso_year}-W{iso_week}", label=label, start=monday)
    if granularity == "monthly":
        first = day.replace(day=1)
        return Period(key=f"{day.year}-{day.month}", label=f"{first:%B} {first.year}", start=first)
    if granularity == "yearly":
        first = date(day.year, 1, 1)
        return Period(key=str(day.year), label=str(day.year), start=first)
    raise ValueError(f"Unknown granularity: {granularity}")


def _day_label(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


def reporting_window(
    granularity: Granularity, now: datetime, windows: WindowConfig
) -> tuple[datetime, datetime]:
    """Default lookback for a granularity, ending at ``now``."""
    end = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
    if granularity == "daily":
        return end - timedelta(days=windows.daily_days), end
    if granularity == "weekly":
        return end - timedelta(days=windows.weekly_days), end
    if granularity == "monthly":
        return _shift_months(end, -windows.monthly_months), end
    if granularity == "yearly":
        return _shift_months(end, -12 * windows.yearly_years), end
    raise ValueError(f"Unknown granularity: {granularity}")


def in_window(timestamp: datetime, window: tuple[datetime, datetime]) -> bool:
    start, end = window
    return start <= timestamp <= end


def _shift_months(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    # Clamp to the last valid day, e.g. Aug 31 minus six months is Feb 28/29.
    day = min(value.day, _days_in_month(year, month))
    return value.replace(year=year, month=month, day=day)


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - timedelta(days=1)).day
