"""Application configuration utilities.

This module centralizes environment configuration for the backend: token
signing parameters, the SQLite database path, CORS origins and log level.

Controls:
- Do not log secrets.
- Fail fast on missing token configuration; the app loads settings at import
  time so a misconfigured process never starts serving.

Environment variables:
- JWT_SECRET: Symmetric signing secret (required)
- JWT_ISSUER: Token issuer (required)
- JWT_AUDIENCE: Token audience (required)
- JWT_ALGORITHM: Defaults to HS256; any other value is rejected
- ACCESS_TOKEN_EXPIRE_MINUTES: Defaults to 240 (4 hours)
- DB_PATH: Optional path to the sqlite database; defaults to ../library.db
- CORS_ORIGINS: Comma separated list of allowed origins
- LOG_LEVEL: Defaults to INFO
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from library_catalog.core.errors import ConfigurationError

DEFAULT_TOKEN_MINUTES = 240


class Settings(BaseModel):
    """Immutable configuration value object loaded from the environment."""

    model_config = {"frozen": True}

    jwt_secret: str = Field(..., min_length=1, description="JWT signing secret.")
    jwt_issuer: str = Field(..., min_length=1, description="JWT issuer claim.")
    jwt_audience: str = Field(..., min_length=1, description="JWT audience claim.")
    jwt_algorithm: Literal["HS256"] = Field(default="HS256", description="JWT signing algorithm (HMAC-SHA-256 only).")
    access_token_expire_minutes: int = Field(
        default=DEFAULT_TOKEN_MINUTES, gt=0, description="Access token TTL in minutes."
    )
    db_path: str = Field(..., description="SQLite DB path.")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:5174"],
        description="Allowed CORS origins.",
    )
    log_level: str = Field(default="INFO", description="Root log level.")


def _default_db_path() -> str:
    """Default SQLite file next to the package: <backend root>/library.db"""
    return str(Path(__file__).resolve().parents[2] / "library.db")


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} is not configured")
    return value


def load_settings() -> Settings:
    """Load settings from the environment.

    Returns:
        Settings: Validated settings object.

    Raises:
        ConfigurationError: If a required value is missing or a value is invalid.
    """
    jwt_secret = _required("JWT_SECRET")
    jwt_issuer = _required("JWT_ISSUER")
    jwt_audience = _required("JWT_AUDIENCE")

    expire_raw = os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(DEFAULT_TOKEN_MINUTES)).strip()
    try:
        expire_minutes = int(expire_raw)
    except ValueError:
        raise ConfigurationError("ACCESS_TOKEN_EXPIRE_MINUTES must be an integer")

    cors_origins_raw = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174")
    cors_origins = [o.strip() for o in cors_origins_raw.split(",") if o.strip()]

    try:
        settings = Settings(
            jwt_secret=jwt_secret,
            jwt_issuer=jwt_issuer,
            jwt_audience=jwt_audience,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256").strip() or "HS256",
            access_token_expire_minutes=expire_minutes,
            db_path=os.getenv("DB_PATH") or _default_db_path(),
            cors_origins=cors_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
    except ValidationError as ve:
        # Report field names only, values may include the secret
        fields = ", ".join(str(err["loc"][0]) for err in ve.errors() if err.get("loc"))
        raise ConfigurationError(f"Invalid configuration: {fields}") from None
    return settings


# Singleton-style accessor
_settings: Optional[Settings] = None

# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Get cached application settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings

# PUBLIC_INTERFACE
def reset_settings_cache() -> None:
    """Reset the cached settings.

    This is primarily intended for tests to ensure that changes to environment
    variables (e.g., DB_PATH) take effect on subsequent calls to get_settings().
    """
    global _settings
    _settings = None
