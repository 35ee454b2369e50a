from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.strategies.hours_strategy import HoursWorkedStrategy
from .database.connection import DatabaseConnection
from .notifications.notifier import Notifier, build_notifier
from .otp.mysql_otp_repository import MySQLOtpRepository
from .otp.repository import OtpRepository
from .otp.service import OtpService, PasswordResetService
from .security.guard import AccessGuard
from .security.tokens import TokenService
from .settings import Settings
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    settings: Settings
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    otp_repo: OtpRepository
    attendance_repo: AttendanceRepository

    tokens: TokenService
    guard: AccessGuard
    notifier: Notifier

    auth_service: AuthService
    otp_service: OtpService
    password_reset_service: PasswordResetService
    attendance_service: AttendanceService


def assemble(
    settings: Settings,
    *,
    users_repo: UserRepository,
    otp_repo: OtpRepository,
    attendance_repo: AttendanceRepository,
    notifier: Notifier,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories and notifier."""

    tokens = TokenService(settings.jwt_secret)
    otp_service = OtpService(otp_repo, users_repo)

    return Container(
        settings=settings,
        conn=conn,
        users_repo=users_repo,
        otp_repo=otp_repo,
        attendance_repo=attendance_repo,
        tokens=tokens,
        guard=AccessGuard(tokens),
        notifier=notifier,
        auth_service=AuthService(users_repo, tokens),
        otp_service=otp_service,
        password_reset_service=PasswordResetService(
            otp_service,
            notifier,
            expose_account_existence=settings.expose_account_existence,
        ),
        attendance_service=AttendanceService(attendance_repo, strategy=HoursWorkedStrategy()),
    )


def build_container(settings: Settings) -> Container:
    conn = DatabaseConnection(settings.db)
    return assemble(
        settings,
        users_repo=MySQLUserRepository(conn),
        otp_repo=MySQLOtpRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notifier=build_notifier(settings.resend_api_key, sender=settings.mail_from),
        conn=conn,
    )
