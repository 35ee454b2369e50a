from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used by the access guard."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Derived work status stored on each attendance record."""

    PRESENT = "present"
    PARTIAL = "partial"
    ABSENT = "absent"
