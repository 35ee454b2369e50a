from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import isoformat_or_none, parse_iso_date
from ..common.http import message
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..security.guard import current_identity

_ALL = "all"


def _optional_param(name: str) -> Optional[str]:
    value = (request.args.get(name) or "").strip()
    if not value or value.lower() == _ALL:
        return None
    return value


def _parse_filters() -> dict:
    employee = _optional_param("employee")
    day = _optional_param("day") or _optional_param("date")
    status = _optional_param("status")

    try:
        employee_id = int(employee) if employee is not None else None
    except ValueError:
        raise ValidationError("employee must be a numeric id")
    try:
        work_date = parse_iso_date(day) if day is not None else None
    except ValueError:
        raise ValidationError("day must be formatted as YYYY-MM-DD")
    try:
        status_value = AttendanceStatus(status.lower()) if status is not None else None
    except ValueError:
        raise ValidationError("status must be one of: present, partial, absent")

    return {"employee_id": employee_id, "day": work_date, "status": status_value}


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    service = container.attendance_service

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @guard.require(Role.EMPLOYEE)
    def check_in():
        record = service.check_in(current_identity().user_id)
        return message("Checked in successfully", checkInTime=isoformat_or_none(record.check_in_time))

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @guard.require(Role.EMPLOYEE)
    def check_out():
        record = service.check_out(current_identity().user_id)
        return message(
            "Checked out successfully",
            checkOutTime=isoformat_or_none(record.check_out_time),
            hoursWorked=record.hours_worked,
            status=record.status.value,
        )

    @app.route("/attendance/mine", methods=["GET"], endpoint="my_attendance")
    @guard.require(Role.EMPLOYEE)
    def my_attendance():
        data = service.my_attendance(current_identity().user_id)
        return message(
            "Attendance loaded",
            today=data.today.to_dict() if data.today else None,
            recent=[r.to_dict() for r in data.recent],
        )

    @app.route("/attendance/logs", methods=["GET"], endpoint="attendance_logs")
    @guard.require(Role.ADMIN)
    def attendance_logs():
        rows = service.logs(**_parse_filters())
        return message(f"{len(rows)} attendance record(s)", logs=[row.to_dict() for row in rows])
