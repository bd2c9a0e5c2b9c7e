from __future__ import annotations

import calendar
from datetime import date, timedelta

import pytest

from src.leave_portal.leave_portal.core.exceptions import InvalidReferenceDate, ValidationError
from src.leave_portal.leave_portal.leave_calendar.grid import build_grid, build_week
from src.leave_portal.leave_portal.leave_calendar.model import DateCell, ReferenceDate, WeekRow


ALL_MONTHS = [(y, m) for y in (2024, 2025, 2026, 2027) for m in range(1, 13)]


def _cells(weeks):
    return [c for w in weeks for c in w.cells]


@pytest.mark.parametrize("year, month", ALL_MONTHS)
def test_grid_cells_are_contiguous_and_week_aligned(year, month):
    weeks = build_grid((year, month))
    cells = _cells(weeks)

    assert len(cells) % 7 == 0
    assert all(len(w.cells) == 7 for w in weeks)
    for prev, cur in zip(cells, cells[1:]):
        assert cur.date - prev.date == timedelta(days=1)

    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    assert cells[0].date.weekday() == 6  # Sunday
    assert cells[-1].date.weekday() == 5  # Saturday
    assert cells[0].date <= first and first - cells[0].date < timedelta(days=7)
    assert cells[-1].date >= last and cells[-1].date - last < timedelta(days=7)


@pytest.mark.parametrize("year, month", ALL_MONTHS)
def test_only_days_of_the_month_are_marked_in_month(year, month):
    cells = _cells(build_grid(date(year, month, 15)))
    in_month = [c.date for c in cells if c.in_current_month]

    assert len(in_month) == calendar.monthrange(year, month)[1]
    assert all(d.month == month and d.year == year for d in in_month)


def test_december_2025_grid_bounds():
    weeks = build_grid(date(2025, 12, 10))

    assert len(weeks) == 5
    assert weeks[0].start == date(2025, 11, 30)
    assert weeks[-1].end == date(2026, 1, 3)
    assert weeks[0].cells[0].in_current_month is False
    assert weeks[-1].cells[-1].in_current_month is False


def test_february_2026_fits_exactly_four_weeks():
    weeks = build_grid((2026, 2))

    assert len(weeks) == 4
    assert weeks[0].start == date(2026, 2, 1)
    assert weeks[-1].end == date(2026, 2, 28)
    assert all(c.in_current_month for c in _cells(weeks))


def test_august_2026_needs_six_weeks():
    weeks = build_grid(ReferenceDate(2026, 8))

    assert len(weeks) == 6
    assert weeks[0].start == date(2026, 7, 26)
    assert weeks[-1].end == date(2026, 9, 5)


def test_is_today_uses_the_supplied_date_only(fixed_today):
    cells = _cells(build_grid(fixed_today, today=fixed_today))
    assert [c.date for c in cells if c.is_today] == [fixed_today]

    assert not any(c.is_today for c in _cells(build_grid(fixed_today)))
    assert not any(c.is_today for c in _cells(build_grid((2026, 3), today=fixed_today)))


def test_padding_day_can_be_today():
    cells = _cells(build_grid((2025, 12), today=date(2026, 1, 2)))
    today_cells = [c for c in cells if c.is_today]

    assert len(today_cells) == 1
    assert today_cells[0].in_current_month is False


def test_grid_is_deterministic():
    assert build_grid((2026, 1), today=date(2026, 1, 5)) == build_grid((2026, 1), today=date(2026, 1, 5))


@pytest.mark.parametrize("year, month", [(2025, 13), (2025, 0), (2025, -1)])
def test_out_of_range_month_is_rejected(year, month):
    with pytest.raises(InvalidReferenceDate):
        build_grid((year, month))


def test_reference_date_rejects_bad_values():
    with pytest.raises(InvalidReferenceDate):
        ReferenceDate(2025, 13)
    with pytest.raises(InvalidReferenceDate):
        ReferenceDate("abc", 1)
    assert issubclass(InvalidReferenceDate, ValidationError)


def test_reference_date_normalizes_to_first_day():
    ref = ReferenceDate.of(date(2026, 1, 28))
    assert ref == ReferenceDate(2026, 1)
    assert ref.first_day == date(2026, 1, 1)
    assert ReferenceDate("2026", "02").month == 2


@pytest.mark.parametrize("reference", [(2026, 12.7), (2026.5, 1), (2026, "1.9"), (2026, None)])
def test_fractional_or_non_numeric_reference_is_rejected(reference):
    with pytest.raises(InvalidReferenceDate):
        build_grid(reference)


def test_whole_number_float_reference_is_accepted():
    assert ReferenceDate(2026.0, 12.0) == ReferenceDate(2026, 12)


def test_grid_outside_supported_range_is_rejected():
    # 0001-01-01 is a Monday; the padding Sunday does not exist.
    with pytest.raises(InvalidReferenceDate):
        build_grid((1, 1))
    with pytest.raises(InvalidReferenceDate):
        build_grid((9999, 12))


def test_build_week_contains_anchor(fixed_today):
    week = build_week(fixed_today, today=fixed_today)

    assert week.start == date(2026, 1, 25)
    assert week.end == date(2026, 1, 31)
    assert [c.is_today for c in week.cells].index(True) == 3


def test_build_week_marks_other_month_days():
    week = build_week(date(2025, 12, 31))

    assert week.start == date(2025, 12, 28)
    assert [c.in_current_month for c in week.cells] == [True, True, True, True, False, False, False]


def test_week_row_requires_seven_contiguous_cells():
    start = date(2026, 1, 4)
    cells = tuple(DateCell(start + timedelta(days=i), True, False) for i in range(7))
    assert WeekRow(cells).end == date(2026, 1, 10)

    with pytest.raises(ValueError):
        WeekRow(cells[:6])
    with pytest.raises(ValueError):
        WeekRow(cells[:6] + (DateCell(date(2026, 1, 20), True, False),))
