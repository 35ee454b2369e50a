from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account owned by the employee directory.

    Note: plain data object, no DB access. ``password_hash`` never leaves the
    service layer.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str] = None
    job_title: Optional[str] = None
    created_at: Optional[datetime] = None

    def summary(self) -> "IdentitySummary":
        return IdentitySummary(user_id=self.user_id, name=self.name, email=self.email, role=self.role)


@dataclass(frozen=True)
class IdentitySummary:
    """Public view of an account returned by login and /auth/me."""

    user_id: int
    name: str
    email: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "email": self.email, "role": self.role.value}
