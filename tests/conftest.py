from __future__ import annotations

from datetime import date, datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, 28 Jan 2026
    return datetime(2026, 1, 28, 9, 0, 0)


@pytest.fixture
def fixed_today(fixed_now) -> date:
    return fixed_now.date()
