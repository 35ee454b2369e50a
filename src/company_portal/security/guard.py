from __future__ import annotations

from functools import wraps
from typing import Iterable, Optional

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .tokens import Identity, TokenService

BEARER_PREFIX = "bearer "


def bearer_token(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""

    if not header:
        return None
    header = header.strip()
    if header[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    return header[len(BEARER_PREFIX):].strip() or None


class AccessGuard:
    """Single gate for every role-restricted operation.

    Routes declare the roles they accept once, via ``require``; no handler
    repeats its own role check.
    """

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def authorize(self, token: Optional[str], required_roles: Iterable[Role] = ()) -> Identity:
        """Resolve ``token`` and admit it when its role is in ``required_roles``.

        An empty ``required_roles`` admits any authenticated identity.
        """

        if not token:
            raise AuthenticationError("Authorization token required")

        identity = self._tokens.verify(token)
        if identity is None:
            raise AuthenticationError("Invalid or expired token")

        roles = {Role(r) for r in required_roles}
        if roles and identity.role not in roles:
            raise AuthorizationError("You do not have access to this resource")
        return identity

    def require(self, *roles: Role):
        """Flask view decorator; stores the admitted identity on ``flask.g``."""

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                token = bearer_token(request.headers.get("Authorization"))
                g.identity = self.authorize(token, roles)
                return view(*args, **kwargs)

            return wrapper

        return decorator


def current_identity() -> Identity:
    return g.identity
