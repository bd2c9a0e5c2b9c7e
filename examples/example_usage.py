"""Ví dụ: dựng lịch nghỉ phép tháng 1/2026 bằng service layer (không qua Flask, không cần DB).

Lưới và vị trí các thanh nghỉ phép được in ra dạng văn bản.
"""

from datetime import date

from src.leave_portal.leave_portal.core.constants import WEEKDAY_LABELS
from src.leave_portal.leave_portal.leave_calendar.model import LeaveEvent
from src.leave_portal.leave_portal.leave_calendar.service import LeaveCalendarService


class NoRepository:
    def list_overlapping(self, **kwargs):
        return []


def main():
    events = [
        LeaveEvent.from_payload(
            {"id": 1, "startDate": "2026-01-26", "endDate": "2026-01-28", "leaveType": {"name": "Annual", "color": "purple"}, "status": "PENDING"}
        ),
        LeaveEvent.from_payload(
            {"id": 2, "startDate": "2026-01-28", "endDate": "2026-01-28", "leaveType": {"name": "Sick", "color": "emerald"}, "status": "APPROVED"}
        ),
        LeaveEvent.from_payload(
            {"id": 4, "startDate": "2026-01-30", "endDate": "2026-02-02", "leaveType": {"name": "Annual", "color": "purple"}, "status": "APPROVED"}
        ),
    ]

    view = LeaveCalendarService(NoRepository()).layout(reference=(2026, 1), events=events, today=date(2026, 1, 28))

    print(" ".join(f"{d:>4}" for d in WEEKDAY_LABELS))
    for week_index, week in enumerate(view.weeks):
        print(" ".join(f"{c.date.day:>3}{'*' if c.is_today else ' '}" for c in week.cells))
        for lane in range(view.lane_count):
            row = ["    "] * 7
            for b in view.blocks:
                if b.week_index == week_index and b.lane == lane:
                    for col in range(b.start_column, b.end_column):
                        row[col] = f"[{b.event_id:>2}]"
            if any(cell.strip() for cell in row):
                print(" ".join(row))

    print(view.overview)


if __name__ == "__main__":
    main()
