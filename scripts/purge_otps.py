"""Delete expired password-reset codes.

Meant for cron; expired codes are already ignored by every lookup, this only
keeps the table small.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from company_portal.common.datetime_utils import now_local
from company_portal.database.connection import DatabaseConnection
from company_portal.otp.mysql_otp_repository import MySQLOtpRepository
from company_portal.settings import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()

    repo = MySQLOtpRepository(DatabaseConnection(settings.db))
    deleted = repo.delete_expired(before=now_local())
    print(f"OK: Deleted {deleted} expired OTP(s) -> {settings.db.describe()}")


if __name__ == "__main__":
    main()
