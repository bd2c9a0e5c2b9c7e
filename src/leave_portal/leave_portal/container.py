from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .core.constants import DEFAULT_STATUS_FILTER
from .database.connection import DBConfig, DatabaseConnection
from .leave_calendar.mysql_leave_repository import MySQLLeaveCalendarRepository
from .leave_calendar.service import LeaveCalendarService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    leave_calendar_repo: MySQLLeaveCalendarRepository

    leave_calendar_service: LeaveCalendarService


def build_container(*, db_config: Mapping, default_status: str = DEFAULT_STATUS_FILTER) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    leave_calendar_repo = MySQLLeaveCalendarRepository(conn)
    leave_calendar_service = LeaveCalendarService(leave_calendar_repo, default_status=default_status)

    return Container(
        conn=conn,
        leave_calendar_repo=leave_calendar_repo,
        leave_calendar_service=leave_calendar_service,
    )
