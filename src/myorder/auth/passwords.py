# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# Cost parameters are the library defaults and are not configurable.
_PH = PasswordHasher()


def hash_password(plain: str) -> str:
    """Salted argon2 hash of a non-empty password."""
    if not plain:
        raise ValueError("Empty password")
    return _PH.hash(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    """Check ``plain`` against a stored hash.

    A stored value that is not an argon2 hash (corrupt row, legacy format) is
    treated like a wrong password, so callers only ever see True or False.
    """
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError):
        return False
