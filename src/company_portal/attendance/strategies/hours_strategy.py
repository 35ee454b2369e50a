from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import FULL_DAY_HOURS
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


def elapsed_hours(check_in: datetime, check_out: datetime) -> float:
    return max(0.0, (check_out - check_in).total_seconds() / 3600)


def round_hours(hours: float) -> float:
    return float(Decimal(str(hours)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class HoursWorkedStrategy(AttendanceStrategy):
    """Present on check-in; on check-out present for a full day, else partial."""

    def __init__(self, full_day_hours: float = FULL_DAY_HOURS):
        self._full_day_hours = float(full_day_hours)

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, check_in: datetime, check_out: datetime) -> StatusDecision:
        hours = elapsed_hours(check_in, check_out)
        status = AttendanceStatus.PRESENT if hours >= self._full_day_hours else AttendanceStatus.PARTIAL
        return StatusDecision(status=status, hours_worked=round_hours(hours))
