from __future__ import annotations

import logging
from dataclasses import dataclass

from ..common.validators import require_email, require_min_length, require_non_empty, require_text
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AccountNotFoundError, AuthenticationError, ValidationError
from ..security.passwords import hash_password, verify_password
from ..security.tokens import Identity, TokenService
from .model import IdentitySummary
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: IdentitySummary


class AuthService:
    """Use case: log in, look up the caller, change own password."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")
        email = require_email(email)
        password = require_text(password, "Password")

        user = self._users.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Login failed for %s", email)
            raise AuthenticationError("Invalid credentials")

        token = self._tokens.issue(user.user_id, user.email, user.role)
        logger.info("User %s logged in (role=%s)", user.user_id, user.role.value)
        return LoginResult(token=token, user=user.summary())

    def current_user(self, identity: Identity) -> IdentitySummary:
        user = self._users.get_by_id(identity.user_id)
        if not user:
            raise AccountNotFoundError("User not found")
        return user.summary()

    def change_password(self, identity: Identity, current_password: str, new_password: str) -> None:
        require_non_empty(current_password, "Current password")
        require_non_empty(new_password, "New password")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        user = self._users.get_by_id(identity.user_id)
        if not user:
            raise AccountNotFoundError("User not found")
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        if not self._users.update_password_hash(user.user_id, hash_password(new_password)):
            raise AccountNotFoundError("User not found")
        logger.info("User %s changed their password", user.user_id)
