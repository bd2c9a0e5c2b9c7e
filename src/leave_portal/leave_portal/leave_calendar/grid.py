from __future__ import annotations

from datetime import date
from typing import Optional, Tuple, Union

from ..common.datetime_utils import add_days, day_offset, end_of_week, last_of_month, start_of_week
from ..core.constants import DAYS_PER_WEEK
from ..core.exceptions import InvalidReferenceDate
from .model import DateCell, ReferenceDate, WeekRow

ReferenceLike = Union[ReferenceDate, date, Tuple[int, int]]


def _week_from(start: date, *, month: ReferenceDate, today: Optional[date]) -> WeekRow:
    cells = []
    for i in range(DAYS_PER_WEEK):
        d = add_days(start, i)
        cells.append(DateCell(date=d, in_current_month=month.contains(d), is_today=(today is not None and d == today)))
    return WeekRow(cells=tuple(cells))


def build_grid(reference: ReferenceLike, *, today: Optional[date] = None) -> list[WeekRow]:
    """Build the Sunday-first month grid for `reference`.

    The grid starts on the Sunday on/before the 1st and ends on the Saturday
    on/after the last day of the month, so every row has exactly 7 cells.
    `today` comes from the caller; the builder never reads the clock.
    """
    month = ReferenceDate.of(reference)

    try:
        grid_start = start_of_week(month.first_day)
        grid_end = end_of_week(last_of_month(month.first_day))
    except OverflowError:
        raise InvalidReferenceDate(f"Tháng {month.month}/{month.year} nằm ngoài phạm vi lịch hỗ trợ")

    total_days = day_offset(grid_end, grid_start) + 1
    return [
        _week_from(add_days(grid_start, offset), month=month, today=today)
        for offset in range(0, total_days, DAYS_PER_WEEK)
    ]


def build_week(anchor: date, *, today: Optional[date] = None) -> WeekRow:
    """Single Sunday-first week containing `anchor` (used by the week view)."""
    try:
        start = start_of_week(anchor)
        end_of_week(anchor)
    except OverflowError:
        raise InvalidReferenceDate(f"Tuần chứa ngày {anchor.isoformat()} nằm ngoài phạm vi lịch hỗ trợ")
    return _week_from(start, month=ReferenceDate.of(anchor), today=today)
