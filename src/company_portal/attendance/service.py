from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, window_start
from ..core.constants import RECENT_WINDOW_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedInError, AlreadyCheckedOutError, NotCheckedInError
from .model import AttendanceLogRow, AttendanceRecord, MyAttendance
from .repository import AttendanceRepository
from .strategies.base import AttendanceStrategy
from .strategies.hours_strategy import HoursWorkedStrategy

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out ledger.

    Per (employee, day) the record moves NoRecord -> CheckedIn -> Complete and
    never back. Both transitions are applied with a conditional write in the
    repository, so concurrent requests cannot create a second record for the
    day or close one twice.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy: AttendanceStrategy | None = None,
        clock: Callable[[], datetime] = now_local,
        recent_days: int = RECENT_WINDOW_DAYS,
    ):
        self._attendance = attendance
        self._strategy = strategy or HoursWorkedStrategy()
        self._clock = clock
        self._recent_days = int(recent_days)

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in_time is not None:
            raise AlreadyCheckedInError("Already checked in today")

        decision = self._strategy.decide_checkin(now=now)
        created = self._attendance.insert_checkin_if_absent(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            status=decision.status,
        )
        if not created:
            raise AlreadyCheckedInError("Already checked in today")

        logger.info("User %s checked in at %s", user_id, now.isoformat())
        record = self._attendance.get_for_user_and_date(user_id, today)
        if record is None:
            raise RuntimeError(f"attendance record for user {user_id} on {today} vanished after insert")
        return record

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise NotCheckedInError("Please check in first")
        if record.check_out_time is not None:
            raise AlreadyCheckedOutError("Already checked out today")

        # A wall clock stepping backwards must not produce check-out < check-in.
        check_out = max(now, record.check_in_time)
        decision = self._strategy.decide_checkout(check_in=record.check_in_time, check_out=check_out)

        closed = self._attendance.update_checkout_if_open(
            attendance_id=record.attendance_id,
            check_out_time=check_out,
            hours_worked=decision.hours_worked,
            status=decision.status,
        )
        if not closed:
            raise AlreadyCheckedOutError("Already checked out today")

        logger.info(
            "User %s checked out at %s (%.2fh, %s)",
            user_id,
            check_out.isoformat(),
            decision.hours_worked,
            decision.status.value,
        )
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_out_time=check_out,
            status=decision.status,
            hours_worked=decision.hours_worked,
            created_at=record.created_at,
            updated_at=check_out,
        )

    def today(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        now = now or self._clock()
        return self._attendance.get_for_user_and_date(user_id, now.date())

    def recent(self, user_id: int, window_days: int | None = None, *, now: datetime | None = None) -> list[AttendanceRecord]:
        now = now or self._clock()
        days = self._recent_days if window_days is None else int(window_days)
        rows = self._attendance.get_recent_for_user(user_id, window_start(now, days))
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def my_attendance(self, user_id: int, *, now: datetime | None = None) -> MyAttendance:
        now = now or self._clock()
        return MyAttendance(today=self.today(user_id, now=now), recent=self.recent(user_id, now=now))

    def logs(
        self,
        *,
        employee_id: Optional[int] = None,
        day: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceLogRow]:
        rows = self._attendance.list_logs(user_id=employee_id, work_date=day, status=status)
        return sorted(rows, key=lambda row: row.record.work_date, reverse=True)
