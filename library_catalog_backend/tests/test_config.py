import importlib
import sys

import pytest

from library_catalog.core.config import DEFAULT_TOKEN_MINUTES, get_settings, load_settings, reset_settings_cache
from library_catalog.core.errors import ConfigurationError


def test_defaults_from_required_env():
    settings = load_settings()
    assert settings.jwt_algorithm == "HS256"
    assert settings.access_token_expire_minutes == DEFAULT_TOKEN_MINUTES == 240
    assert settings.cors_origins == ["http://localhost:5173", "http://localhost:5174"]
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("name", ["JWT_SECRET", "JWT_ISSUER", "JWT_AUDIENCE"])
def test_missing_required_value_is_fatal(monkeypatch, name):
    monkeypatch.delenv(name, raising=False)
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert name in exc.value.message


def test_blank_secret_is_fatal(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ConfigurationError):
        load_settings()


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_invalid_token_lifetime(monkeypatch, raw):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", raw)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_error_does_not_leak_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "super-private-value")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "-1")
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert "super-private-value" not in str(exc.value)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example ,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.access_token_expire_minutes == 1440
    assert settings.cors_origins == ["http://a.example", "http://b.example"]
    assert settings.log_level == "DEBUG"


def test_settings_are_cached_until_reset(monkeypatch, tmp_path):
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("DB_PATH", str(tmp_path / "other.db"))
    assert get_settings().db_path == first.db_path
    reset_settings_cache()
    assert get_settings().db_path == str(tmp_path / "other.db")


@pytest.mark.parametrize("algorithm", ["RS256", "none", "HS999", "hs256"])
def test_only_hmac_sha256_signing_is_accepted(monkeypatch, algorithm):
    monkeypatch.setenv("JWT_ALGORITHM", algorithm)
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert "jwt_algorithm" in exc.value.message


def test_explicit_hs256_is_accepted(monkeypatch):
    monkeypatch.setenv("JWT_ALGORITHM", "HS256")
    assert load_settings().jwt_algorithm == "HS256"


def test_app_refuses_to_load_without_signing_secret(monkeypatch):
    monkeypatch.delitem(sys.modules, "library_catalog.api.main", raising=False)
    monkeypatch.delenv("JWT_SECRET")
    reset_settings_cache()
    with pytest.raises(ConfigurationError):
        importlib.import_module("library_catalog.api.main")
    assert "library_catalog.api.main" not in sys.modules
