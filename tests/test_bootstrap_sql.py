from __future__ import annotations

from pathlib import Path

from src.leave_portal.leave_portal.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.leave_portal.leave_portal.database.mysql_base import normalize_mysql_date

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\n-- comment; ignored\nINSERT INTO t VALUES (\"c;d\");"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]


def test_schema_creates_calendar_tables():
    sql = _strip_create_db_and_use((REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    created = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")]
    assert created == ["departments", "users", "leave_types", "leave_requests"]


def test_normalize_mysql_date():
    from datetime import date, datetime

    assert normalize_mysql_date(date(2026, 1, 30)) == date(2026, 1, 30)
    assert normalize_mysql_date(datetime(2026, 1, 30, 23, 59)) == date(2026, 1, 30)
    assert normalize_mysql_date("2026-01-30") == date(2026, 1, 30)
    assert normalize_mysql_date(b"2026-01-30") == date(2026, 1, 30)
    assert normalize_mysql_date(None) is None
