from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceLogRow, AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage for attendance records, at most one per (user_id, work_date)."""

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, since: date) -> Sequence[AttendanceRecord]:
        """Records with ``work_date >= since``, newest first."""

        raise NotImplementedError

    def insert_checkin_if_absent(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> bool:
        """Create the day's record unless one already exists; False when it did."""

        raise NotImplementedError

    def update_checkout_if_open(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        hours_worked: float,
        status: AttendanceStatus,
    ) -> bool:
        """Close a record whose check-out is still empty; False when it was not."""

        raise NotImplementedError

    def list_logs(
        self,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceLogRow]:
        """Records joined to their owners, ``work_date`` descending."""

        raise NotImplementedError
