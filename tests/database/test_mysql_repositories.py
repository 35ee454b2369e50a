from __future__ import annotations

from datetime import date, datetime, timedelta
from unittest.mock import MagicMock

import mysql.connector
import pytest
from mysql.connector import errorcode

from company_portal.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from company_portal.core.enums import AttendanceStatus
from company_portal.core.exceptions import AccountNotFoundError
from company_portal.otp.mysql_otp_repository import MySQLOtpRepository

NOW = datetime(2026, 2, 2, 9, 0)


class ScriptedCursor:
    """Cursor double that answers each execute with the next scripted rowcount."""

    def __init__(self, rowcounts=(), error=None, rows=()):
        self._rowcounts = list(rowcounts)
        self._error = error
        self._rows = list(rows)
        self.rowcount = -1
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), params))
        if self._error is not None:
            raise self._error
        if self._rowcounts:
            self.rowcount = self._rowcounts.pop(0)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        pass


def _factory(cursor):
    conn = MagicMock()
    conn.cursor.return_value = cursor
    factory = MagicMock()
    factory.connect.return_value = conn
    return factory, conn


def test_duplicate_check_in_returns_false():
    dup = mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    factory, conn = _factory(ScriptedCursor(error=dup))

    created = MySQLAttendanceRepository(factory).insert_checkin_if_absent(
        user_id=3, work_date=NOW.date(), check_in_time=NOW, status=AttendanceStatus.PRESENT
    )

    assert created is False
    conn.rollback.assert_called_once()


def test_other_integrity_errors_propagate():
    fk = mysql.connector.errors.IntegrityError(msg="FK", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    factory, _ = _factory(ScriptedCursor(error=fk))

    with pytest.raises(mysql.connector.errors.IntegrityError):
        MySQLAttendanceRepository(factory).insert_checkin_if_absent(
            user_id=99, work_date=NOW.date(), check_in_time=NOW, status=AttendanceStatus.PRESENT
        )


def test_check_out_only_closes_open_record():
    cursor = ScriptedCursor(rowcounts=[0])
    factory, _ = _factory(cursor)

    closed = MySQLAttendanceRepository(factory).update_checkout_if_open(
        attendance_id=7, check_out_time=NOW, hours_worked=8.0, status=AttendanceStatus.PRESENT
    )

    assert closed is False
    assert "check_out_time IS NULL" in cursor.executed[0][0]


def test_logs_without_filters_has_no_where_clause():
    row = {
        "attendance_id": 1,
        "user_id": 3,
        "work_date": date(2026, 2, 2),
        "check_in_time": NOW,
        "check_out_time": NOW + timedelta(hours=8),
        "status": "present",
        "hours_worked": "8.00",
        "created_at": NOW,
        "updated_at": NOW,
        "owner_name": "John Smith",
        "owner_email": "pm@company.com",
        "owner_job_title": "Project Manager",
    }
    cursor = ScriptedCursor(rows=[row])
    factory, _ = _factory(cursor)

    rows = MySQLAttendanceRepository(factory).list_logs()

    sql, params = cursor.executed[0]
    assert "WHERE" not in sql
    assert params == ()
    assert rows[0].record.hours_worked == 8.0
    assert rows[0].owner.email == "pm@company.com"


def test_logs_day_filter_uses_half_open_range():
    cursor = ScriptedCursor()
    factory, _ = _factory(cursor)

    MySQLAttendanceRepository(factory).list_logs(work_date=date(2026, 2, 2), status=AttendanceStatus.PARTIAL)

    _, params = cursor.executed[0]
    assert params == (date(2026, 2, 2), date(2026, 2, 3), "partial")


def test_consume_without_usable_code_touches_nothing_else():
    cursor = ScriptedCursor(rowcounts=[0])
    factory, conn = _factory(cursor)

    consumed = MySQLOtpRepository(factory).consume(
        email="pm@company.com", code="123456", now=NOW, new_password_hash="hash"
    )

    assert consumed is False
    assert len(cursor.executed) == 1
    conn.commit.assert_called_once()


def test_consume_updates_password_in_same_transaction():
    cursor = ScriptedCursor(rowcounts=[1, 1])
    factory, conn = _factory(cursor)

    assert MySQLOtpRepository(factory).consume(email="pm@company.com", code="123456", now=NOW, new_password_hash="h")

    assert len(cursor.executed) == 2
    assert cursor.executed[1][1] == ("h", NOW, "pm@company.com")
    factory.connect.assert_called_once()
    conn.commit.assert_called_once()


def test_consume_rolls_back_when_account_is_gone():
    cursor = ScriptedCursor(rowcounts=[1, 0])
    factory, conn = _factory(cursor)

    with pytest.raises(AccountNotFoundError):
        MySQLOtpRepository(factory).consume(email="pm@company.com", code="123456", now=NOW, new_password_hash="h")

    conn.commit.assert_not_called()
    conn.rollback.assert_called_once()
