"""Bearer-token gate for protected route groups.

Routers opt in with ``APIRouter(dependencies=[Depends(require_token)])`` so
every route in the group is verified before its handler runs.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from library_catalog.core.config import get_settings
from library_catalog.core.errors import AuthTokenInvalid
from library_catalog.models.auth import TokenClaims
from library_catalog.security.jwt import TokenService

logger = logging.getLogger(__name__)

# HTTP Bearer security scheme; missing headers are reported by require_token
bearer_scheme = HTTPBearer(auto_error=False)


# PUBLIC_INTERFACE
def get_token_service() -> TokenService:
    """Dependency providing a token service bound to the current settings."""
    return TokenService(get_settings())


# PUBLIC_INTERFACE
def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Verify the request's bearer token and store its claims in request.state.

    Raises:
        AuthTokenInvalid: If the header is missing or the token fails verification.
    """
    if credentials is None or not credentials.credentials:
        logger.info("Missing bearer token on %s %s", request.method, request.url.path)
        raise AuthTokenInvalid("Missing bearer token")

    claims = tokens.verify(credentials.credentials)
    request.state.claims = claims
    return claims

