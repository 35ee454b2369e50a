from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, OTP_LENGTH, OTP_TTL_MINUTES
from ..core.exceptions import AccountNotFoundError, DeliveryError, InvalidOtpError, ValidationError
from ..notifications.messages import otp_email
from ..notifications.notifier import Notifier
from ..security.passwords import hash_password
from ..users.repository import UserRepository
from .model import OtpRecord
from .repository import OtpRepository

logger = logging.getLogger(__name__)


def generate_code(length: int = OTP_LENGTH) -> str:
    """Uniformly random numeric code without a leading zero."""

    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


class OtpService:
    """OTP ledger: issue, check and single-use consume recovery codes.

    Issuing a new code does not invalidate earlier ones; every unexpired,
    unconsumed code for the email stays usable until it expires.
    """

    def __init__(
        self,
        otps: OtpRepository,
        users: UserRepository,
        *,
        ttl: timedelta = timedelta(minutes=OTP_TTL_MINUTES),
        clock: Callable[[], datetime] = now_local,
    ):
        self._otps = otps
        self._users = users
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl_minutes(self) -> int:
        return int(self._ttl.total_seconds() // 60)

    def request(self, email: str, *, now: Optional[datetime] = None) -> OtpRecord:
        now = now or self._clock()
        if not self._users.get_by_email(email):
            raise AccountNotFoundError("User not found")

        code = generate_code()
        expires_at = now + self._ttl
        otp_id = self._otps.insert(email=email, code=code, expires_at=expires_at, created_at=now)
        logger.info("Issued password reset OTP %s for %s (expires %s)", otp_id, email, expires_at.isoformat())
        return OtpRecord(otp_id=otp_id, email=email, code=code, expires_at=expires_at, consumed=False, created_at=now)

    def verify(self, email: str, code: str, *, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        return self._otps.find_usable(email=email, code=code, now=now) is not None

    def consume(self, email: str, code: str, new_password_digest: str, *, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        consumed = self._otps.consume(email=email, code=code, now=now, new_password_hash=new_password_digest)
        if consumed:
            logger.info("Password reset OTP consumed for %s", email)
        return consumed


class PasswordResetService:
    """Use case: forgot-password / verify-otp / reset-password."""

    def __init__(self, otp: OtpService, notifier: Notifier, *, expose_account_existence: bool = True):
        self._otp = otp
        self._notifier = notifier
        self._expose_account_existence = expose_account_existence

    def forgot_password(self, email: str) -> None:
        if not email:
            raise ValidationError("Email is required")
        email = require_email(email)

        try:
            record = self._otp.request(email)
        except AccountNotFoundError:
            if self._expose_account_existence:
                raise
            logger.info("Password reset requested for unknown account %s", email)
            return

        subject, body = otp_email(record.code, self._otp.ttl_minutes)
        if not self._notifier.deliver(email, subject, body):
            logger.error("Failed to deliver password reset OTP %s to %s", record.otp_id, email)
            raise DeliveryError("Failed to send OTP email")

    def verify_code(self, email: str, code: str) -> None:
        email, code = self._require_email_and_code(email, code)
        if not self._otp.verify(email, code):
            raise InvalidOtpError("Invalid or expired OTP")

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        email, code = self._require_email_and_code(email, code)
        require_non_empty(new_password, "New password")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        if not self._otp.consume(email, code, hash_password(new_password)):
            raise InvalidOtpError("Invalid or expired OTP")

    @staticmethod
    def _require_email_and_code(email: str, code: str) -> tuple[str, str]:
        email = require_email(email)
        code = require_non_empty(code, "OTP")
        return email, code
