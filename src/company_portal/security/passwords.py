"""One-way password hashing.

Thin wrapper over werkzeug's salted ``scrypt`` hashes so the rest of the code
never touches hash formats directly.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

PASSWORD_HASH_METHOD = "scrypt"


def hash_password(plaintext: str) -> str:
    return generate_password_hash(plaintext, method=PASSWORD_HASH_METHOD)


def verify_password(plaintext: str, digest: str | None) -> bool:
    if not digest or plaintext is None:
        return False
    try:
        return check_password_hash(digest, plaintext)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False
