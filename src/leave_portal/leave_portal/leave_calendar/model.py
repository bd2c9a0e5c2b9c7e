from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import day_offset, parse_iso_date
from ..common.validators import require_year_month
from ..core.constants import DAYS_PER_WEEK
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ReferenceDate:
    """Tháng đang xem trên lịch, luôn chuẩn hoá về ngày 1 của tháng."""

    year: int
    month: int

    def __post_init__(self) -> None:
        year, month = require_year_month(self.year, self.month)
        object.__setattr__(self, "year", year)
        object.__setattr__(self, "month", month)

    @classmethod
    def of(cls, value: "ReferenceDate | date | tuple[int, int]") -> "ReferenceDate":
        if isinstance(value, ReferenceDate):
            return value
        if isinstance(value, date):
            return cls(value.year, value.month)
        year, month = value
        return cls(year, month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month


@dataclass(frozen=True)
class DateCell:
    date: date
    in_current_month: bool
    is_today: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "in_current_month": self.in_current_month,
            "is_today": self.is_today,
        }


@dataclass(frozen=True)
class WeekRow:
    """Seven date-contiguous cells, Sunday first."""

    cells: tuple[DateCell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != DAYS_PER_WEEK:
            raise ValueError(f"WeekRow needs {DAYS_PER_WEEK} cells, got {len(self.cells)}")
        for i, cell in enumerate(self.cells):
            if day_offset(cell.date, self.cells[0].date) != i:
                raise ValueError("WeekRow cells must be consecutive days")

    @property
    def start(self) -> date:
        return self.cells[0].date

    @property
    def end(self) -> date:
        return self.cells[-1].date

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "cells": [c.to_dict() for c in self.cells],
        }


@dataclass(frozen=True)
class LeaveEvent:
    """Đơn nghỉ phép hiển thị trên lịch (ngày kết thúc tính cả ngày đó)."""

    id: int
    start_date: date
    end_date: date
    label: str
    color_token: Optional[str]
    status: LeaveStatus
    employee_name: Optional[str] = None
    user_id: Optional[int] = None

    @property
    def length_days(self) -> int:
        return day_offset(self.end_date, self.start_date) + 1

    def covers(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "LeaveEvent":
        """Build an event from the API shape
        {id, startDate, endDate, leaveType: {name, color}, status}.
        """
        try:
            leave_type = payload.get("leaveType") or {}
            user = payload.get("user") or {}
            name = " ".join(p for p in (user.get("firstName"), user.get("lastName")) if p) or None
            return cls(
                id=int(payload["id"]),
                start_date=parse_iso_date(str(payload["startDate"])),
                end_date=parse_iso_date(str(payload["endDate"])),
                label=str(leave_type.get("name") or ""),
                color_token=leave_type.get("color"),
                status=LeaveStatus(str(payload.get("status") or LeaveStatus.PENDING.value).upper()),
                employee_name=name,
                user_id=int(payload["userId"]) if payload.get("userId") is not None else None,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Dữ liệu đơn nghỉ không hợp lệ: {e}")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "label": self.label,
            "color_token": self.color_token,
            "status": self.status.value,
            "employee_name": self.employee_name,
            "user_id": self.user_id,
        }


@dataclass(frozen=True)
class PlacementBlock:
    event_id: int
    week_index: int
    start_column: int
    column_span: int
    lane: int

    @property
    def end_column(self) -> int:
        """Exclusive end column."""
        return self.start_column + self.column_span

    def overlaps(self, other: "PlacementBlock") -> bool:
        return self.start_column < other.end_column and other.start_column < self.end_column

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "week_index": self.week_index,
            "start_column": self.start_column,
            "column_span": self.column_span,
            "lane": self.lane,
        }


@dataclass(frozen=True)
class CalendarOverview:
    on_leave_today: int
    pending: int


@dataclass(frozen=True)
class CalendarView:
    """Read-model trả về cho lớp hiển thị: lưới tuần + vị trí các thanh nghỉ phép."""

    mode: str
    anchor: date
    weeks: list[WeekRow]
    events: list[LeaveEvent]
    blocks: list[PlacementBlock]
    overview: CalendarOverview = field(default_factory=lambda: CalendarOverview(0, 0))

    @property
    def lane_count(self) -> int:
        return max((b.lane for b in self.blocks), default=-1) + 1

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "anchor": self.anchor.isoformat(),
            "year": self.anchor.year,
            "month": self.anchor.month,
            "weeks": [w.to_dict() for w in self.weeks],
            "events": [e.to_dict() for e in self.events],
            "blocks": [b.to_dict() for b in self.blocks],
            "lane_count": self.lane_count,
            "overview": {
                "on_leave_today": self.overview.on_leave_today,
                "pending": self.overview.pending,
            },
        }
