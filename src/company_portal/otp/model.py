from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OtpRecord:
    """A password-recovery code issued to an email address."""

    otp_id: int
    email: str
    code: str
    expires_at: datetime
    consumed: bool
    created_at: datetime

    def is_usable(self, now: datetime) -> bool:
        return not self.consumed and self.expires_at > now
