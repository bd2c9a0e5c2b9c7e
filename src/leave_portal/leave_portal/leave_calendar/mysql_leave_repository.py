from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import LeaveEvent
from .repository import LeaveCalendarRepository


class MySQLLeaveCalendarRepository(LeaveCalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_overlapping(
        self,
        *,
        start: date,
        end: date,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        dept_id: Optional[int] = None,
    ) -> Sequence[LeaveEvent]:
        clauses = ["lr.start_date <= %s", "lr.end_date >= %s"]
        params: list[object] = [end, start]

        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("lr.user_id=%s")
            params.append(int(user_id))
        if dept_id is not None:
            clauses.append("u.dept_id=%s")
            params.append(int(dept_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    lr.leave_request_id,
                    lr.user_id,
                    lr.start_date,
                    lr.end_date,
                    lr.status,
                    lt.name AS leave_type_name,
                    lt.color AS leave_type_color,
                    u.full_name
                FROM leave_requests lr
                JOIN leave_types lt ON lt.leave_type_id = lr.leave_type_id
                JOIN users u ON u.user_id = lr.user_id
                WHERE {where}
                ORDER BY lr.start_date ASC, lr.leave_request_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            out: list[LeaveEvent] = []
            for r in rows:
                out.append(
                    LeaveEvent(
                        id=int(r["leave_request_id"]),
                        start_date=normalize_mysql_date(r["start_date"]),
                        end_date=normalize_mysql_date(r["end_date"]),
                        label=r.get("leave_type_name") or "",
                        color_token=r.get("leave_type_color"),
                        status=LeaveStatus(r["status"]),
                        employee_name=r.get("full_name"),
                        user_id=int(r["user_id"]),
                    )
                )
            return out
