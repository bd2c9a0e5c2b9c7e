from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import day_offset
from ..core.exceptions import InvalidEventRange
from .model import LeaveEvent, PlacementBlock, WeekRow


def _validate(events: Iterable[LeaveEvent]) -> list[LeaveEvent]:
    checked = []
    for ev in events:
        if ev.end_date < ev.start_date:
            raise InvalidEventRange(
                f"Đơn nghỉ #{ev.id}: ngày kết thúc ({ev.end_date.isoformat()}) "
                f"trước ngày bắt đầu ({ev.start_date.isoformat()})",
                event_id=ev.id,
            )
        checked.append(ev)
    return checked


def clip_to_week(event: LeaveEvent, week: WeekRow, week_index: int) -> Optional[PlacementBlock]:
    """Project one event onto one week, or None if they do not intersect.

    The end date is inclusive: an event on a single day spans one column.
    Returned blocks carry lane 0 until lanes are assigned.
    """
    if event.end_date < week.start or event.start_date > week.end:
        return None

    visible_start = max(event.start_date, week.start)
    visible_end = min(event.end_date, week.end)
    start_column = day_offset(visible_start, week.start)
    column_span = day_offset(visible_end, week.start) - start_column + 1
    return PlacementBlock(
        event_id=event.id,
        week_index=week_index,
        start_column=start_column,
        column_span=column_span,
        lane=0,
    )


def assign_lanes(blocks: Sequence[PlacementBlock]) -> list[PlacementBlock]:
    """Greedy interval colouring of the blocks of ONE week.

    Blocks are visited by (start_column, event_id); each takes the lowest lane
    not held by an already placed block whose columns overlap it.
    """
    placed: list[PlacementBlock] = []
    for block in sorted(blocks, key=lambda b: (b.start_column, b.event_id)):
        taken = {p.lane for p in placed if p.overlaps(block)}
        lane = 0
        while lane in taken:
            lane += 1
        placed.append(replace(block, lane=lane))
    return placed


def place_events(weeks: Sequence[WeekRow], events: Iterable[LeaveEvent]) -> list[PlacementBlock]:
    """Lay leave events out over the week rows of a calendar grid.

    Every (event, week) intersection yields one block clipped to that week.
    Lanes are assigned per week so overlapping bars never share a lane.
    Output is ordered by week index, then lane, then start column.
    Raises InvalidEventRange before producing anything if an event ends
    before it starts.
    """
    checked = _validate(events)

    out: list[PlacementBlock] = []
    for week_index, week in enumerate(weeks):
        week_blocks = []
        for ev in checked:
            block = clip_to_week(ev, week, week_index)
            if block is not None:
                week_blocks.append(block)

        laned = assign_lanes(week_blocks)
        laned.sort(key=lambda b: (b.lane, b.start_column))
        out.extend(laned)

    return out
