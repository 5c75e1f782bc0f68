"""
Password digest helpers.

Digests are plain MD5 hex strings, kept compatible with records written by
earlier versions of the app. They are used only for equality comparison and
are not a security boundary.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import string

__all__ = [
    "digest_password",
    "verify_password",
    "generate_temporary_password",
]

_TEMP_PASSWORD_ALPHABET = string.ascii_lowercase + string.digits


def digest_password(plaintext: str) -> str:
    """Deterministically digest a plaintext password into 32 hex characters."""
    return hashlib.md5(plaintext.encode("utf-8")).hexdigest()


def verify_password(plaintext: str | None, stored_digest: str | None) -> bool:
    """Compare a plaintext password against a stored digest."""
    return hmac.compare_digest(digest_password(plaintext or ""), stored_digest or "")


def generate_temporary_password(length: int = 8) -> str:
    """Random lowercase alphanumeric password for the forgot-password flow."""
    return "".join(secrets.choice(_TEMP_PASSWORD_ALPHABET) for _ in range(length))
