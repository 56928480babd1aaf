"""Client Configuration - tests for env loading, validation and derived keys."""

import pytest
from pydantic import ValidationError

from meridian.config import Settings, get_settings
from meridian.core.domain_types import AuthProtocol


def test_defaults_match_bank_frontend(monkeypatch):
    monkeypatch.delenv("MERIDIAN_API_BASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "http://localhost:8080"
    assert settings.session_timeout_seconds == 1800
    assert settings.auth_protocol is AuthProtocol.TOKEN
    assert settings.token_key == "meridian_auth_token"
    assert settings.user_key == "meridian_user_data"
    assert settings.credentials_key == "meridian_credentials"
    assert settings.expires_key == "meridian_expires_at"


def test_env_prefix_and_protocol(monkeypatch):
    monkeypatch.setenv("MERIDIAN_API_BASE_URL", "https://bank.example/api/")
    monkeypatch.setenv("MERIDIAN_AUTH_PROTOCOL", "basic")
    monkeypatch.setenv("MERIDIAN_STORAGE_NAMESPACE", "tab2")
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "https://bank.example/api"
    assert settings.auth_protocol is AuthProtocol.BASIC
    assert settings.token_key == "tab2_auth_token"


def test_non_positive_timeout_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, session_timeout_seconds=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
