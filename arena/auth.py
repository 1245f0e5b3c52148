"""Credential helpers for players and organizers."""

from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

HASH_METHOD = "pbkdf2:sha256"
_HASH_PREFIXES = ("pbkdf2:", "scrypt:")


def is_password_hash(value: str | None) -> bool:
    """Return True if value has the werkzeug ``method$salt$hash`` shape."""
    if not value or not value.startswith(_HASH_PREFIXES):
        return False
    parts = value.split("$")
    return len(parts) == 3 and all(parts)


def hash_password(password: str | None) -> str | None:
    """Hash a plain password; hashes and empty values pass through."""
    if not password or is_password_hash(password):
        return password
    return generate_password_hash(password, method=HASH_METHOD)


def verify_password(stored: str | None, candidate: str | None) -> bool:
    """Compare a login attempt against the stored credential.

    Records written before hashing was introduced hold the plain password,
    which is compared in constant time.
    """
    if not stored or candidate is None:
        return False
    if is_password_hash(stored):
        return check_password_hash(stored, candidate)
    return secrets.compare_digest(stored.encode(), candidate.encode())
