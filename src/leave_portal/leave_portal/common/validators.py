from __future__ import annotations

from datetime import MAXYEAR, MINYEAR

from ..core.exceptions import InvalidReferenceDate, ValidationError


def require_int(value: object, field_name: str) -> int:
    """Whole numbers only: ints, digit strings, or floats without a fractional part."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} không hợp lệ")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field_name} không hợp lệ")
        return int(value)
    if not isinstance(value, (int, str)):
        raise ValidationError(f"{field_name} không hợp lệ")
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field_name} không hợp lệ")


def require_year_month(year: object, month: object) -> tuple[int, int]:
    """Validate a calendar (year, month) pair without wrapping out-of-range months."""
    try:
        y = require_int(year, "Năm")
        m = require_int(month, "Tháng")
    except ValidationError as e:
        raise InvalidReferenceDate(str(e))

    if not 1 <= m <= 12:
        raise InvalidReferenceDate(f"Tháng không hợp lệ: {m} (phải từ 1 đến 12)")
    if not MINYEAR <= y <= MAXYEAR:
        raise InvalidReferenceDate(f"Năm không hợp lệ: {y}")
    return y, m
