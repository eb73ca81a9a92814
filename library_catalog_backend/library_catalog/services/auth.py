"""Registration and login against the users table.

Login is two sequential checks, email lookup then password verification, and
both failures surface as the same ``InvalidCredentials`` error.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any

from library_catalog.core.errors import DuplicateEmail, InvalidCredentials, ValidationError
from library_catalog.db import sqlite as sqlite_db
from library_catalog.models.auth import UserPublic
from library_catalog.security.jwt import TokenService
from library_catalog.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _user_public(rec: dict[str, Any]) -> UserPublic:
    return UserPublic(id=rec["id"], name=rec["name"], email=rec["email"])


# PUBLIC_INTERFACE
def register(name: str, email: str, password: str) -> UserPublic:
    """Create a user account.

    Raises:
        ValidationError: If any field is missing or blank.
        DuplicateEmail: If the email is already registered.
    """
    if _is_blank(name) or _is_blank(email) or _is_blank(password):
        raise ValidationError("All fields are required")

    email_norm = _normalize_email(email)
    with sqlite_db.get_conn() as conn:
        if sqlite_db.get_user_by_email(conn, email_norm):
            raise DuplicateEmail("User with this email already exists")
        record = {
            "name": name,
            "email": email_norm,
            "password_hash": hash_password(password),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            record["id"] = sqlite_db.insert_user(conn, record)
        except sqlite3.IntegrityError:
            # Unique constraint violation from a concurrent registration
            raise DuplicateEmail("User with this email already exists") from None

    logger.info("Registered user %s", record["id"])
    return _user_public(record)


# PUBLIC_INTERFACE
def authenticate(email: str, password: str, tokens: TokenService) -> tuple[UserPublic, str]:
    """Verify credentials and issue an access token.

    Returns:
        The user's public fields and a signed bearer token.

    Raises:
        ValidationError: If email or password is missing or blank.
        InvalidCredentials: If the email is unknown or the password is wrong.
    """
    if _is_blank(email) or _is_blank(password):
        raise ValidationError("Email and password are required")

    with sqlite_db.get_conn() as conn:
        rec = sqlite_db.get_user_by_email(conn, _normalize_email(email))

    if rec is None or not verify_password(password, rec["password_hash"]):
        logger.info("Failed login attempt")
        raise InvalidCredentials("Invalid email or password")

    user = _user_public(rec)
    token = tokens.issue(user)
    logger.info("User %s logged in", user.id)
    return user, token
