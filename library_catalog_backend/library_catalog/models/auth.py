"""Auth and user-facing DTOs."""
from __future__ import annotations

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Registration payload. Blank fields are rejected by the auth service."""
    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="User email address")
    password: str = Field(default="", description="Raw password (hashed before storage).")


class LoginRequest(BaseModel):
    """Login payload."""
    email: str = Field(default="", description="User email address")
    password: str = Field(default="", description="Password")


class UserPublic(BaseModel):
    """Safe user representation; never carries the password."""
    id: int = Field(..., description="User identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email address")


class RegisterResponse(BaseModel):
    message: str = Field(default="User registered successfully")
    user_id: int = Field(..., serialization_alias="userId", description="User identifier")
    name: str
    email: str


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    token: str = Field(..., description="Signed bearer token")
    user_id: int = Field(..., serialization_alias="userId", description="User identifier")
    name: str
    email: str


class TokenClaims(BaseModel):
    """Claims carried by a verified access token."""
    sub: str = Field(..., description="User identifier as string")
    email: str = Field(default="")
    name: str = Field(default="")
    jti: str = Field(..., description="Unique token identifier")
    iss: str
    aud: str
    iat: int
    exp: int
