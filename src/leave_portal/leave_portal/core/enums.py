from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng, quyết định phạm vi lịch nghỉ được xem."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    """Trạng thái duyệt đơn nghỉ phép lưu trong CSDL."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CalendarViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
