from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceLogRow, AttendanceRecord, OwnerSummary
from .repository import AttendanceRepository

_RECORD_COLUMNS = (
    "ar.attendance_id, ar.user_id, ar.work_date, ar.check_in_time, ar.check_out_time, "
    "ar.status, ar.hours_worked, ar.created_at, ar.updated_at"
)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        hours_worked=float(r.get("hours_worked") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date >= %s AND ar.work_date < %s
                """,
                (int(user_id), work_date, work_date + timedelta(days=1)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, since: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date >= %s
                ORDER BY ar.work_date DESC
                """,
                (int(user_id), since),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def insert_checkin_if_absent(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # uq_attendance_user_day makes the losing side of a race fail here.
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (user_id, work_date, check_in_time, check_out_time, status, hours_worked, created_at, updated_at)
                    VALUES(%s,%s,%s,NULL,%s,0,%s,%s)
                    """,
                    (int(user_id), work_date, check_in_time, status.value, check_in_time, check_in_time),
                )
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                return False
            raise
        return True

    def update_checkout_if_open(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        hours_worked: float,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, hours_worked=%s, status=%s, updated_at=%s
                WHERE attendance_id=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, hours_worked, status.value, check_out_time, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_logs(
        self,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceLogRow]:
        clauses: list[str] = []
        params: list[object] = []

        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))
        if work_date is not None:
            clauses.append("ar.work_date >= %s AND ar.work_date < %s")
            params.extend([work_date, work_date + timedelta(days=1)])
        if status is not None:
            clauses.append("ar.status=%s")
            params.append(status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            # users.user_id is the primary key, so the join yields one row per record.
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS},
                       u.name AS owner_name, u.email AS owner_email, u.job_title AS owner_job_title
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                {where}
                ORDER BY ar.work_date DESC, ar.user_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceLogRow(
                    record=_to_record(r),
                    owner=OwnerSummary(
                        user_id=int(r["user_id"]),
                        name=r["owner_name"],
                        email=r["owner_email"],
                        job_title=r.get("owner_job_title"),
                    ),
                )
                for r in fetchall(cur)
            ]
