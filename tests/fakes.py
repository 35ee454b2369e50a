from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from company_portal.attendance.model import AttendanceLogRow, AttendanceRecord, OwnerSummary
from company_portal.core.enums import AttendanceStatus, Role
from company_portal.core.exceptions import AccountNotFoundError
from company_portal.otp.model import OtpRecord
from company_portal.security.passwords import hash_password
from company_portal.users.model import User


def make_user(user_id: int, email: str, role: Role, password: str = "secret123", **extra) -> User:
    return User(
        user_id=user_id,
        name=extra.pop("name", email.split("@")[0].title()),
        email=email,
        password_hash=hash_password(password),
        role=role,
        **extra,
    )


class InMemoryUsers:
    def __init__(self, users=()):
        self._lock = threading.Lock()
        self._by_id: dict[int, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> None:
        with self._lock:
            self._by_id[user.user_id] = user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        with self._lock:
            return self._set_hash_locked(user_id, password_hash)

    def _set_hash_locked(self, user_id: int, password_hash: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, password_hash=password_hash)
        return True


class InMemoryOtps:
    """OTP store whose consume is atomic across threads, like the SQL version."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._lock = threading.Lock()
        self._next_id = 1
        self.records: dict[int, OtpRecord] = {}

    def insert(self, *, email: str, code: str, expires_at: datetime, created_at: datetime) -> int:
        with self._lock:
            otp_id = self._next_id
            self._next_id += 1
            self.records[otp_id] = OtpRecord(
                otp_id=otp_id, email=email, code=code, expires_at=expires_at, consumed=False, created_at=created_at
            )
            return otp_id

    def _match(self, email: str, code: str, now: datetime) -> Optional[OtpRecord]:
        matches = [r for r in self.records.values() if r.email == email and r.code == code and r.is_usable(now)]
        return max(matches, key=lambda r: r.otp_id) if matches else None

    def find_usable(self, *, email: str, code: str, now: datetime) -> Optional[OtpRecord]:
        with self._lock:
            return self._match(email, code, now)

    def consume(self, *, email: str, code: str, now: datetime, new_password_hash: str) -> bool:
        with self._lock:
            record = self._match(email, code, now)
            if record is None:
                return False
            user = self._users.get_by_email(email)
            if user is None:
                raise AccountNotFoundError("User not found")
            self.records[record.otp_id] = replace(record, consumed=True)
            with self._users._lock:
                self._users._set_hash_locked(user.user_id, new_password_hash)
            return True

    def delete_expired(self, *, before: datetime) -> int:
        with self._lock:
            expired = [k for k, r in self.records.items() if r.expires_at <= before]
            for k in expired:
                del self.records[k]
            return len(expired)


class InMemoryAttendance:
    """Attendance store keyed on (user_id, work_date) with atomic conditional writes."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._users = users or InMemoryUsers()
        self._lock = threading.Lock()
        self._id = 0
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_user_date.values())

    def put(self, record: AttendanceRecord) -> None:
        with self._lock:
            self._by_user_date[(record.user_id, record.work_date)] = record
            self._id = max(self._id, record.attendance_id)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: int, since: date):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id and r.work_date >= since]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def insert_checkin_if_absent(self, *, user_id: int, work_date: date, check_in_time: datetime, status: AttendanceStatus) -> bool:
        with self._lock:
            if (user_id, work_date) in self._by_user_date:
                return False
            self._id += 1
            self._by_user_date[(user_id, work_date)] = AttendanceRecord(
                attendance_id=self._id,
                user_id=user_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                hours_worked=0.0,
                created_at=check_in_time,
                updated_at=check_in_time,
            )
            return True

    def update_checkout_if_open(self, *, attendance_id: int, check_out_time: datetime, hours_worked: float, status: AttendanceStatus) -> bool:
        with self._lock:
            for key, rec in self._by_user_date.items():
                if rec.attendance_id == attendance_id:
                    if rec.check_in_time is None or rec.check_out_time is not None:
                        return False
                    self._by_user_date[key] = replace(
                        rec,
                        check_out_time=check_out_time,
                        hours_worked=hours_worked,
                        status=status,
                        updated_at=check_out_time,
                    )
                    return True
            return False

    def list_logs(self, *, user_id=None, work_date=None, status=None):
        rows = []
        for rec in self._by_user_date.values():
            if user_id is not None and rec.user_id != user_id:
                continue
            if work_date is not None and rec.work_date != work_date:
                continue
            if status is not None and rec.status != status:
                continue
            owner = self._users.get_by_id(rec.user_id)
            if owner is None:
                continue
            rows.append(
                AttendanceLogRow(
                    record=rec,
                    owner=OwnerSummary(user_id=owner.user_id, name=owner.name, email=owner.email, job_title=owner.job_title),
                )
            )
        rows.sort(key=lambda row: (-row.record.work_date.toordinal(), row.record.user_id))
        return rows


class RecordingNotifier:
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.sent: list[tuple[str, str, str]] = []

    def deliver(self, recipient: str, subject: str, body: str) -> bool:
        self.sent.append((recipient, subject, body))
        return self.ok
