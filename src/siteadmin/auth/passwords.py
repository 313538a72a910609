# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import hashlib
import hmac
import secrets

SALT_BYTES = 16


def hash_password(plain: str, salt: str) -> str:
    """Lowercase hex SHA-256 of ``plain + salt``."""
    return hashlib.sha256((plain + salt).encode("utf-8", "surrogatepass")).hexdigest()


def generate_salt() -> str:
    return secrets.token_hex(SALT_BYTES)


def make_password_hash(plain: str) -> str:
    """Return a fresh ``salt:digest`` string for storage."""
    if not plain:
        raise ValueError("Empty password")
    salt = generate_salt()
    return f"{salt}:{hash_password(plain, salt)}"


def verify_password(plain: str, stored: str) -> bool:
    if not stored or plain is None:
        return False
    salt, sep, expected = stored.partition(":")
    if not sep or not salt or not expected:
        return False
    computed = hash_password(plain, salt)
    return hmac.compare_digest(computed.encode("ascii"), expected.encode("utf-8", "surrogatepass"))
