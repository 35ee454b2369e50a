from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    hours_worked: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkIn": isoformat_or_none(self.check_in_time),
            "checkOut": isoformat_or_none(self.check_out_time),
            "status": self.status.value,
            "hoursWorked": self.hours_worked,
        }


@dataclass(frozen=True)
class OwnerSummary:
    user_id: int
    name: str
    email: str
    job_title: Optional[str] = None


@dataclass(frozen=True)
class AttendanceLogRow:
    """Read-model for the admin log view: a record joined to its owner."""

    record: AttendanceRecord
    owner: OwnerSummary

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["user"] = {
            "id": self.owner.user_id,
            "name": self.owner.name,
            "email": self.owner.email,
            "jobTitle": self.owner.job_title,
        }
        return data


@dataclass(frozen=True)
class MyAttendance:
    today: Optional[AttendanceRecord]
    recent: list[AttendanceRecord]
