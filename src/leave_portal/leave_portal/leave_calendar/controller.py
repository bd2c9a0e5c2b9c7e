from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_int
from ..core.enums import CalendarViewMode, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .model import LeaveEvent, ReferenceDate
from .service import Viewer


def register(app: Flask, container: Container) -> None:
    service = container.leave_calendar_service

    def _error(message: str, status_code: int):
        return jsonify({"success": False, "message": message}), status_code

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "role" not in session:
                return _error("Vui lòng đăng nhập để tiếp tục!", 401)
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except AuthorizationError as e:
                return _error(str(e), 403)
            except ValidationError as e:
                return _error(str(e), 400)
            except Exception:
                app.logger.exception("leave calendar request failed: %s %s", request.method, request.path)
                return _error("Lỗi hệ thống khi tải lịch nghỉ phép", 500)

        return wrapper

    def _current_viewer() -> Viewer:
        try:
            role = Role(session.get("role"))
            user_id = require_int(session["user_id"], "Người dùng")
            dept_id = session.get("dept_id")
            if dept_id is not None:
                dept_id = require_int(dept_id, "Phòng ban")
        except (ValueError, ValidationError):
            raise AuthorizationError("Bạn không có quyền")
        return Viewer(user_id=user_id, role=role, dept_id=dept_id)

    def _today() -> date:
        return now_local().date()

    def _parse_date_arg(name: str) -> date:
        value = request.args.get(name)
        if not value:
            return _today()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Ngày không hợp lệ (YYYY-MM-DD)")

    def _status_arg() -> Optional[str]:
        return request.args.get("status") or None

    @app.route("/api/leave-calendar", methods=["GET"], endpoint="leave_calendar_month")
    @login_required
    @json_errors
    def leave_calendar_month():
        today = _today()
        year = request.args.get("year") or today.year
        month = request.args.get("month") or today.month
        reference = ReferenceDate(require_int(year, "Năm"), require_int(month, "Tháng"))

        view = service.month_view(viewer=_current_viewer(), reference=reference, today=today, status=_status_arg())
        return jsonify({"success": True, "data": view.to_dict()}), 200

    @app.route("/api/leave-calendar/week", methods=["GET"], endpoint="leave_calendar_week")
    @login_required
    @json_errors
    def leave_calendar_week():
        anchor = _parse_date_arg("date")
        view = service.week_view(viewer=_current_viewer(), anchor=anchor, today=_today(), status=_status_arg())
        return jsonify({"success": True, "data": view.to_dict()}), 200

    @app.route("/api/leave-calendar/navigate", methods=["GET"], endpoint="leave_calendar_navigate")
    @login_required
    @json_errors
    def leave_calendar_navigate():
        anchor = _parse_date_arg("date")
        try:
            mode = CalendarViewMode((request.args.get("view") or CalendarViewMode.MONTH.value).lower())
        except ValueError:
            raise ValidationError("Chế độ xem không hợp lệ (month/week)")
        step = require_int(request.args.get("step") or 1, "Bước")

        target = service.navigate(anchor, view=mode, step=step)
        return jsonify({"success": True, "data": {"view": mode.value, "date": target.isoformat()}}), 200

    @app.route("/api/leave-calendar/layout", methods=["POST"], endpoint="leave_calendar_layout")
    @login_required
    @json_errors
    def leave_calendar_layout():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict) or "year" not in data or "month" not in data:
            raise ValidationError("Cần nhập năm và tháng")

        reference = ReferenceDate(data.get("year"), data.get("month"))
        raw_events = data.get("events") or []
        if not isinstance(raw_events, list):
            raise ValidationError("Danh sách đơn nghỉ không hợp lệ")
        events = [LeaveEvent.from_payload(e) for e in raw_events]

        view = service.layout(reference=reference, events=events, today=_today())
        return jsonify({"success": True, "data": view.to_dict()}), 200
