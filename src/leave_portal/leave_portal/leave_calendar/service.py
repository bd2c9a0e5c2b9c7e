from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import shift_months, shift_weeks
from ..core.constants import DEFAULT_STATUS_FILTER, STATUS_FILTER_ALL
from ..core.enums import CalendarViewMode, LeaveStatus, Role
from ..core.exceptions import AuthorizationError, InvalidReferenceDate, ValidationError
from .grid import ReferenceLike, build_grid, build_week
from .model import CalendarOverview, CalendarView, LeaveEvent, ReferenceDate, WeekRow
from .placement import place_events
from .repository import LeaveCalendarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewer:
    """Người đang xem lịch (lấy từ session)."""

    user_id: int
    role: Role
    dept_id: Optional[int] = None


@dataclass(frozen=True)
class VisibilityScope:
    user_id: Optional[int] = None
    dept_id: Optional[int] = None


class LeaveCalendarService:
    def __init__(self, leaves: LeaveCalendarRepository, *, default_status: str = DEFAULT_STATUS_FILTER):
        self._leaves = leaves
        self._default_status = default_status

    @staticmethod
    def scope_for(viewer: Viewer) -> VisibilityScope:
        if viewer.role == Role.ADMIN:
            return VisibilityScope()
        if viewer.role == Role.MANAGER:
            if viewer.dept_id is None:
                raise AuthorizationError("Quản lý chưa được gán phòng ban")
            return VisibilityScope(dept_id=int(viewer.dept_id))
        if viewer.role == Role.EMPLOYEE:
            return VisibilityScope(user_id=int(viewer.user_id))
        raise AuthorizationError("Bạn không có quyền")

    def resolve_status(self, status: Optional[str]) -> Optional[LeaveStatus]:
        """None -> default filter, 'ALL' -> no filter, else a LeaveStatus name."""
        raw = (status or "").strip().upper() or self._default_status.upper()
        if raw == STATUS_FILTER_ALL:
            return None
        try:
            return LeaveStatus(raw)
        except ValueError:
            raise ValidationError(f"Trạng thái không hợp lệ: {status}")

    def _fetch(self, *, viewer: Viewer, weeks: Sequence[WeekRow], status: Optional[str]) -> list[LeaveEvent]:
        scope = self.scope_for(viewer)
        status_filter = self.resolve_status(status)
        events = list(
            self._leaves.list_overlapping(
                start=weeks[0].start,
                end=weeks[-1].end,
                status=status_filter,
                user_id=scope.user_id,
                dept_id=scope.dept_id,
            )
        )
        logger.debug(
            "calendar fetch role=%s scope=%s status=%s range=%s..%s events=%d",
            viewer.role.value,
            scope,
            status_filter.value if status_filter else STATUS_FILTER_ALL,
            weeks[0].start,
            weeks[-1].end,
            len(events),
        )
        return events

    @staticmethod
    def overview(events: Iterable[LeaveEvent], *, today: date) -> CalendarOverview:
        on_leave = 0
        pending = 0
        for ev in events:
            if ev.status == LeaveStatus.APPROVED and ev.covers(today):
                on_leave += 1
            if ev.status == LeaveStatus.PENDING:
                pending += 1
        return CalendarOverview(on_leave_today=on_leave, pending=pending)

    def _view(self, *, mode: CalendarViewMode, anchor: date, weeks: list[WeekRow], events: list[LeaveEvent], today: date) -> CalendarView:
        blocks = place_events(weeks, events)
        return CalendarView(
            mode=mode.value,
            anchor=anchor,
            weeks=weeks,
            events=events,
            blocks=blocks,
            overview=self.overview(events, today=today),
        )

    def month_view(
        self,
        *,
        viewer: Viewer,
        reference: ReferenceLike,
        today: date,
        status: Optional[str] = None,
    ) -> CalendarView:
        month = ReferenceDate.of(reference)
        weeks = build_grid(month, today=today)
        events = self._fetch(viewer=viewer, weeks=weeks, status=status)
        return self._view(mode=CalendarViewMode.MONTH, anchor=month.first_day, weeks=weeks, events=events, today=today)

    def week_view(
        self,
        *,
        viewer: Viewer,
        anchor: date,
        today: date,
        status: Optional[str] = None,
    ) -> CalendarView:
        weeks = [build_week(anchor, today=today)]
        events = self._fetch(viewer=viewer, weeks=weeks, status=status)
        return self._view(mode=CalendarViewMode.WEEK, anchor=anchor, weeks=weeks, events=events, today=today)

    def layout(self, *, reference: ReferenceLike, events: Sequence[LeaveEvent], today: date) -> CalendarView:
        """Lay out caller-supplied events without touching the repository."""
        month = ReferenceDate.of(reference)
        weeks = build_grid(month, today=today)
        return self._view(mode=CalendarViewMode.MONTH, anchor=month.first_day, weeks=weeks, events=list(events), today=today)

    @staticmethod
    def navigate(anchor: date, *, view: CalendarViewMode, step: int) -> date:
        try:
            if view == CalendarViewMode.WEEK:
                return shift_weeks(anchor, step)
            return shift_months(anchor, step)
        except (OverflowError, ValueError):
            raise InvalidReferenceDate("Ngày điều hướng nằm ngoài phạm vi lịch hỗ trợ")
