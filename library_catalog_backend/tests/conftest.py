"""
Pytest configuration.

Makes the application package importable without an installed distribution,
provides the token settings the app requires at import time, and binds each
API test to its own SQLite file.
"""
import os
import sys
from pathlib import Path

import pytest

# Compute the backend root that contains the 'library_catalog' package
BACKEND_ROOT = Path(__file__).resolve().parents[1]

backend_root_str = str(BACKEND_ROOT)
if backend_root_str not in sys.path:
    sys.path.insert(0, backend_root_str)

TEST_SECRET = "test-signing-secret-0123456789abcdef"
TEST_ISSUER = "library-catalog-tests"
TEST_AUDIENCE = "library-catalog-clients"

# The app module refuses to load without these
os.environ.setdefault("JWT_SECRET", TEST_SECRET)
os.environ.setdefault("JWT_ISSUER", TEST_ISSUER)
os.environ.setdefault("JWT_AUDIENCE", TEST_AUDIENCE)

from library_catalog.core.config import reset_settings_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    """Every test starts from the test token settings and a private database."""
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("JWT_ISSUER", TEST_ISSUER)
    monkeypatch.setenv("JWT_AUDIENCE", TEST_AUDIENCE)
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
    monkeypatch.setenv("DB_PATH", str(tmp_path / "library.db"))
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from library_catalog.api.main import app

    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Register a user, log in, and return the Authorization header."""

    def _do(name: str = "Ann", email: str = "ann@x.com", password: str = "pw1") -> dict:
        r = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 200, r.text
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _do


@pytest.fixture
def auth_headers(register_and_login):
    return register_and_login()
