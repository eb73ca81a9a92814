"""Password hashing.

Stored credentials are salted pbkdf2-sha256 hashes produced by passlib; the raw
password is never stored, logged or echoed back.
"""
from __future__ import annotations

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# PUBLIC_INTERFACE
def hash_password(password: str) -> str:
    """Hash a password for storage.

    Raises:
        ValueError: If the password is empty.
    """
    if not isinstance(password, str) or not password:
        raise ValueError("Password must not be empty.")
    return _pwd_context.hash(password)


# PUBLIC_INTERFACE
def verify_password(password: str, hashed: str) -> bool:
    """Check a presented password against a stored hash; malformed hashes never match."""
    if not password or not hashed:
        return False
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        # Unrecognized or corrupted hash
        return False
