from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.exceptions import AccountNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OtpRecord
from .repository import OtpRepository


class MySQLOtpRepository(OtpRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, *, email: str, code: str, expires_at: datetime, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO password_reset_otps(email, code, expires_at, consumed, created_at)
                VALUES(%s,%s,%s,0,%s)
                """,
                (email, code, expires_at, created_at),
            )
            return int(cur.lastrowid)

    def find_usable(self, *, email: str, code: str, now: datetime) -> Optional[OtpRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT otp_id, email, code, expires_at, consumed, created_at
                FROM password_reset_otps
                WHERE email=%s AND code=%s AND consumed=0 AND expires_at > %s
                ORDER BY otp_id DESC
                LIMIT 1
                """,
                (email, code, now),
            )
            r = fetchone(cur)
            if not r:
                return None
            return OtpRecord(
                otp_id=int(r["otp_id"]),
                email=r["email"],
                code=r["code"],
                expires_at=r["expires_at"],
                consumed=bool(r["consumed"]),
                created_at=r["created_at"],
            )

    def consume(self, *, email: str, code: str, now: datetime, new_password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # The consumed=0 predicate is re-evaluated under the row lock, so a
            # racing transaction that committed first leaves nothing to match.
            cur.execute(
                """
                UPDATE password_reset_otps
                SET consumed=1, consumed_at=%s
                WHERE email=%s AND code=%s AND consumed=0 AND expires_at > %s
                ORDER BY otp_id DESC
                LIMIT 1
                """,
                (now, email, code, now),
            )
            if cur.rowcount == 0:
                return False

            cur.execute(
                "UPDATE users SET password_hash=%s, updated_at=%s WHERE email=%s",
                (new_password_hash, now, email),
            )
            if cur.rowcount == 0:
                # Rolls back the consumed flag with the rest of the transaction.
                raise AccountNotFoundError("User not found")
            return True

    def delete_expired(self, *, before: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM password_reset_otps WHERE expires_at <= %s", (before,))
            return int(cur.rowcount)
