"""Tests for configuration module."""

import os


def test_settings_import():
    """Test that settings can be imported."""
    from gym_backend.config import settings

    assert settings is not None


def test_default_settings():
    """Test default settings values."""
    from gym_backend.config import settings

    assert settings.app_name
    assert settings.app_env in ["development", "production", "test"]
    assert isinstance(settings.debug, bool)
    assert "sqlite" in settings.database_url or "postgresql" in settings.database_url
    assert settings.member_code_max_retries == 10
    assert settings.member_code_insert_attempts >= 1
    assert settings.redis_url is None


def test_env_override():
    """Test that environment variables override defaults."""
    from gym_backend.config import Settings

    original_value = os.environ.get("MEMBER_CODE_MAX_RETRIES")
    os.environ["MEMBER_CODE_MAX_RETRIES"] = "4"
    try:
        assert Settings().member_code_max_retries == 4
    finally:
        if original_value:
            os.environ["MEMBER_CODE_MAX_RETRIES"] = original_value
        else:
            del os.environ["MEMBER_CODE_MAX_RETRIES"]
