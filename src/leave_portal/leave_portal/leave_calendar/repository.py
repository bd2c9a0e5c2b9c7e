from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveEvent


class LeaveCalendarRepository(Protocol):
    def list_overlapping(
        self,
        *,
        start: date,
        end: date,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        dept_id: Optional[int] = None,
    ) -> Sequence[LeaveEvent]:
        """Leave requests whose [start_date, end_date] intersects [start, end].

        Ordered by start date, then id.
        """

        raise NotImplementedError
