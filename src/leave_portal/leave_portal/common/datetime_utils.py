from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    ISO timestamps (e.g. '2026-01-30T00:00:00.000Z') are accepted too; only the
    calendar-date part is used since leave is day-granular.
    """
    return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_offset(later: date, earlier: date) -> int:
    """Number of whole days from `earlier` to `later` (negative if before)."""
    return (later - earlier).days


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def shift_weeks(value: date, weeks: int) -> date:
    return value + timedelta(weeks=weeks)


def shift_months(value: date, months: int) -> date:
    """Move `value` by N calendar months, clamping the day of month.

    Jan 31 shifted by +1 lands on the last day of February, not in March.
    """
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def first_of_month(value: date) -> date:
    return value.replace(day=1)


def last_of_month(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def sunday_index(value: date) -> int:
    """Column of `value` in a Sunday-first week (Sun=0 .. Sat=6)."""
    return (value.weekday() + 1) % 7


def start_of_week(value: date) -> date:
    """Sunday on or before `value`."""
    return value - timedelta(days=sunday_index(value))


def end_of_week(value: date) -> date:
    """Saturday on or after `value`."""
    return value + timedelta(days=6 - sunday_index(value))
