from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import JWT_ALGORITHM, TOKEN_TTL_DAYS
from ..core.enums import Role

logger = logging.getLogger(__name__)

DEV_FALLBACK_SECRET = "dev-only-jwt-secret-change-me-before-deploying-anywhere"


@dataclass(frozen=True)
class Identity:
    """Who the bearer of a verified token is."""

    user_id: int
    email: str
    role: Role


class TokenService:
    """Issues and verifies signed, self-contained identity tokens (JWT/HS256).

    Stateless apart from the signing secret, so one instance can be shared by
    every request thread.
    """

    def __init__(self, secret: Optional[str], *, ttl: timedelta = timedelta(days=TOKEN_TTL_DAYS)):
        if not secret:
            logger.warning(
                "JWT_SECRET is not set; using the development-only fallback key. "
                "Set JWT_SECRET before running in production."
            )
            secret = DEV_FALLBACK_SECRET
        self._secret = secret
        self._ttl = ttl

    @property
    def uses_fallback_secret(self) -> bool:
        return self._secret == DEV_FALLBACK_SECRET

    def issue(self, user_id: int, email: str, role: Role, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": Role(role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[Identity]:
        """Return the embedded identity, or ``None`` for any kind of failure."""

        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "email", "role", "iat", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            return None

        try:
            return Identity(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (TypeError, ValueError) as exc:
            logger.debug("Token rejected: malformed claims (%s)", exc)
            return None
