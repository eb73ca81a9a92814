"""Access token issuance and verification.

Tokens are HS256 JWTs carrying the user's id, name and email plus a unique
``jti``, scoped by issuer and audience and valid for a fixed window.
``TokenService`` receives its settings at construction and is stateless, so
one instance can be shared freely between requests.

Controls:
- Never log tokens or the signing secret.
- Every decode verifies signature, expiry, issuer and audience.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from library_catalog.core.config import Settings
from library_catalog.core.errors import AuthTokenInvalid, ConfigurationError
from library_catalog.models.auth import TokenClaims, UserPublic

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": True,
    "verify_iss": True,
    "verify_aud": True,
    "require_exp": True,
    "require_iat": True,
    "require_iss": True,
    "require_aud": True,
    "require_sub": True,
    "require_jti": True,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify signed access tokens."""

    def __init__(self, settings: Settings, clock: Optional[Clock] = None) -> None:
        if not settings.jwt_secret or not settings.jwt_secret.strip():
            raise ConfigurationError("JWT_SECRET is not configured")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._lifetime = timedelta(minutes=settings.access_token_expire_minutes)
        self._clock = clock or _utcnow

    # PUBLIC_INTERFACE
    def issue(self, user: UserPublic) -> str:
        """
        PUBLIC_INTERFACE
        Create a signed JWT for an authenticated user.

        Args:
            user: The verified user; only id, name and email are embedded.

        Returns:
            A compact JWT string.
        """
        now = self._clock()
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "jti": uuid4().hex,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    # PUBLIC_INTERFACE
    def verify(self, token: str) -> TokenClaims:
        """
        PUBLIC_INTERFACE
        Decode and validate a JWT, returning its claims.

        Raises:
            AuthTokenInvalid: If the token is malformed, expired, signed with
                another key, or issued for another issuer/audience.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options=_DECODE_OPTIONS,
            )
            return TokenClaims(**payload)
        except JWTError as exc:
            logger.info("Rejected access token: %s", exc.__class__.__name__)
            raise AuthTokenInvalid("Invalid or expired token") from None
        except PydanticValidationError:
            logger.info("Rejected access token: unexpected claim shape")
            raise AuthTokenInvalid("Invalid or expired token") from None
