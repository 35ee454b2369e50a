from __future__ import annotations

from datetime import datetime

import pytest

from company_portal.container import assemble
from company_portal.core.enums import Role
from company_portal.database.connection import DBConfig
from company_portal.main import create_app
from company_portal.settings import Settings

from fakes import InMemoryAttendance, InMemoryOtps, InMemoryUsers, RecordingNotifier, make_user

TEST_SECRET = "unit-test-secret-with-at-least-32-bytes!!"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        db=DBConfig(host="localhost", port=3306, user="test", password="", database="company_portal_test"),
        jwt_secret=TEST_SECRET,
        log_level="WARNING",
    )


@pytest.fixture
def admin():
    return make_user(1, "admin@company.com", Role.ADMIN, "admin123", name="System Administrator")


@pytest.fixture
def hr():
    return make_user(2, "hr@company.com", Role.HR, "hr1234", name="HR Manager")


@pytest.fixture
def employee():
    return make_user(3, "pm@company.com", Role.EMPLOYEE, "emp123", name="John Smith", job_title="Project Manager")


@pytest.fixture
def users(admin, hr, employee) -> InMemoryUsers:
    return InMemoryUsers([admin, hr, employee])


@pytest.fixture
def otps(users) -> InMemoryOtps:
    return InMemoryOtps(users)


@pytest.fixture
def attendance(users) -> InMemoryAttendance:
    return InMemoryAttendance(users)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def container(settings, users, otps, attendance, notifier):
    return assemble(settings, users_repo=users, otp_repo=otps, attendance_repo=attendance, notifier=notifier)


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def auth_header(container):
    def _header(user) -> dict:
        token = container.tokens.issue(user.user_id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _header
