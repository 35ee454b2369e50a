from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_text(value: object, field_name: str) -> str:
    """JSON bodies can carry numbers, lists or null where text is expected."""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: object, field_name: str) -> str:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    text = require_text(value, field_name)
    if not text.strip():
        raise ValidationError(f"{field_name} is required")
    return text.strip()


def require_min_length(value: object, field_name: str, min_len: int) -> str:
    text = require_text(value, field_name)
    if len(text) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return text


def require_email(value: object, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid address")
    return email
