"""Authentication routes: register, login.

Controls:
- Blank fields are rejected with 400 before touching storage.
- Passwords are hashed; never logged or echoed back.
- Unknown email and wrong password return the same 401.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from library_catalog.models.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from library_catalog.security.gate import get_token_service
from library_catalog.security.jwt import TokenService
from library_catalog.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=RegisterResponse,
    summary="Register user",
    description="Create a new user account.",
)
def register(payload: RegisterRequest):
    """Register a new user.

    Returns:
        200 with the public user fields.
        400 if a field is blank or the email is already registered.
    """
    user = auth_service.register(payload.name, payload.email, payload.password)
    return RegisterResponse(user_id=user.id, name=user.name, email=user.email)


# PUBLIC_INTERFACE
@router.post("/login", response_model=LoginResponse, summary="Login", description="Authenticate and receive an access token.")
def login(payload: LoginRequest, tokens: TokenService = Depends(get_token_service)):
    """Authenticate a user and return a bearer token with the public user fields."""
    user, token = auth_service.authenticate(payload.email, payload.password, tokens)
    return LoginResponse(token=token, user_id=user.id, name=user.name, email=user.email)
