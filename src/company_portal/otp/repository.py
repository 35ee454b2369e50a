from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import OtpRecord


class OtpRepository(Protocol):
    def insert(self, *, email: str, code: str, expires_at: datetime, created_at: datetime) -> int:
        raise NotImplementedError

    def find_usable(self, *, email: str, code: str, now: datetime) -> Optional[OtpRecord]:
        """Newest unconsumed record for ``email``/``code`` whose expiry is after ``now``."""

        raise NotImplementedError

    def consume(self, *, email: str, code: str, now: datetime, new_password_hash: str) -> bool:
        """Atomically mark one usable record consumed and set the owner's password.

        Returns False, changing nothing, when no usable record matches at update
        time. Of several concurrent calls for one code at most one returns True.
        """

        raise NotImplementedError

    def delete_expired(self, *, before: datetime) -> int:
        raise NotImplementedError
