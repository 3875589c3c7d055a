"""
Unit tests for config_module.py.

Tests cover:
- .env file loading and environment variable overriding
- get_config with present keys, missing keys, and defaults
- typed accessors and their fallbacks
- validate_config passing and failing scenarios
"""

import os
import logging
import pytest

from .config_module import (
    ConfigError,
    TOKEN_KEY,
    config_summary,
    get_config,
    get_config_float,
    get_config_int,
    load_config,
    validate_config,
)


class TestLoadConfig:
    """Test cases for load_config function."""

    def test_load_config_existing_file(self, tmp_path, caplog, monkeypatch):
        """Loading an existing .env file exports its keys."""
        monkeypatch.delenv(TOKEN_KEY, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{TOKEN_KEY}=pk.test-token\nMAPBOX_MAX_WORKERS=4\n")

        with caplog.at_level(logging.INFO):
            assert load_config(str(env_file)) is True

        assert os.getenv(TOKEN_KEY) == "pk.test-token"
        assert os.getenv("MAPBOX_MAX_WORKERS") == "4"
        assert f"Loaded configuration from {str(env_file)}" in caplog.text

        monkeypatch.delenv(TOKEN_KEY, raising=False)
        monkeypatch.delenv("MAPBOX_MAX_WORKERS", raising=False)

    def test_load_config_nonexistent_file(self, caplog):
        """A missing .env file only produces a warning."""
        nonexistent_file = "/path/that/does/not/exist/.env"

        with caplog.at_level(logging.WARNING):
            assert load_config(nonexistent_file) is False

        assert f"Configuration file {nonexistent_file} not found" in caplog.text

    def test_load_config_override_existing_env(self, tmp_path, monkeypatch):
        """Values in the .env file override the process environment."""
        monkeypatch.setenv("MAPBOX_BASE_URL", "https://original.invalid")

        env_file = tmp_path / ".env"
        env_file.write_text("MAPBOX_BASE_URL=https://override.invalid\n")

        load_config(str(env_file))

        assert os.getenv("MAPBOX_BASE_URL") == "https://override.invalid"


class TestGetConfig:
    """Test cases for get_config and the typed accessors."""

    def test_get_config_existing_key(self, monkeypatch):
        monkeypatch.setenv("EXISTING_KEY", "existing_value")
        assert get_config("EXISTING_KEY") == "existing_value"

    def test_get_config_missing_key_with_default(self, monkeypatch):
        monkeypatch.delenv("MISSING_KEY", raising=False)
        assert get_config("MISSING_KEY", "default_value") == "default_value"

    def test_get_config_missing_key_no_default(self, monkeypatch):
        monkeypatch.delenv("MISSING_KEY", raising=False)
        assert get_config("MISSING_KEY") is None

    def test_get_config_empty_key(self, monkeypatch):
        """An empty variable is returned as-is, not replaced by the default."""
        monkeypatch.setenv("EMPTY_KEY", "")
        assert get_config("EMPTY_KEY", "fallback") == ""

    def test_get_config_int(self, monkeypatch):
        monkeypatch.setenv("MAPBOX_MAX_WORKERS", "16")
        assert get_config_int("MAPBOX_MAX_WORKERS", 8) == 16

    def test_get_config_int_invalid_value(self, monkeypatch, caplog):
        monkeypatch.setenv("MAPBOX_MAX_WORKERS", "lots")

        with caplog.at_level(logging.WARNING):
            assert get_config_int("MAPBOX_MAX_WORKERS", 8) == 8

        assert "invalid integer value" in caplog.text

    def test_get_config_float(self, monkeypatch):
        monkeypatch.setenv("MAPBOX_REQUEST_TIMEOUT", "2.5")
        assert get_config_float("MAPBOX_REQUEST_TIMEOUT", 30.0) == 2.5

    def test_get_config_float_missing(self, monkeypatch):
        monkeypatch.delenv("MAPBOX_REQUEST_TIMEOUT", raising=False)
        assert get_config_float("MAPBOX_REQUEST_TIMEOUT", 30.0) == 30.0

    def test_get_config_int_blank_value(self, monkeypatch):
        monkeypatch.setenv("MAPBOX_MAX_WORKERS", "  ")
        assert get_config_int("MAPBOX_MAX_WORKERS", 8) == 8


class TestConfigSummary:
    """Test the settings overview."""

    def test_token_masked(self, monkeypatch):
        monkeypatch.setenv(TOKEN_KEY, "pk.eyJ1Ijoic2VjcmV0In0")
        monkeypatch.setenv("MAPBOX_MAX_WORKERS", "4")
        monkeypatch.delenv("MAPBOX_CACHE_DIR", raising=False)

        summary = config_summary()

        assert summary[TOKEN_KEY] == "pk.eyJ..."
        assert summary["MAPBOX_MAX_WORKERS"] == "4"
        assert summary["MAPBOX_CACHE_DIR"] is None
        assert "MAPBOX_LOG_FILE" in summary

    def test_no_token(self, monkeypatch):
        monkeypatch.delenv(TOKEN_KEY, raising=False)
        assert config_summary()[TOKEN_KEY] is None


class TestValidateConfig:
    """Test cases for validate_config function."""

    @pytest.fixture(autouse=True)
    def env(self, monkeypatch):
        monkeypatch.setenv("VALID_KEY1", "value1")
        monkeypatch.setenv("VALID_KEY2", "value2")
        monkeypatch.setenv("EMPTY_KEY", "")
        monkeypatch.setenv("WHITESPACE_KEY", "   ")
        monkeypatch.delenv("MISSING_KEY", raising=False)
        monkeypatch.delenv("MISSING_KEY1", raising=False)
        monkeypatch.delenv("MISSING_KEY2", raising=False)

    def test_validate_config_all_present(self, caplog):
        with caplog.at_level(logging.INFO):
            validate_config(["VALID_KEY1", "VALID_KEY2"])

        assert "Configuration validation passed" in caplog.text

    def test_validate_config_missing_keys(self, caplog):
        with pytest.raises(ConfigError) as exc_info:
            validate_config(["VALID_KEY1", "MISSING_KEY1", "MISSING_KEY2"])

        assert "Missing keys: MISSING_KEY1, MISSING_KEY2" in str(exc_info.value)
        assert "Configuration validation failed" in caplog.text

    def test_validate_config_whitespace_key(self):
        """Whitespace-only values count as empty."""
        with pytest.raises(ConfigError) as exc_info:
            validate_config(["WHITESPACE_KEY"])

        assert "Empty keys: WHITESPACE_KEY" in str(exc_info.value)

    def test_validate_config_missing_and_empty(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_config(["VALID_KEY1", "MISSING_KEY", "EMPTY_KEY"])

        error_msg = str(exc_info.value)
        assert "Missing keys: MISSING_KEY" in error_msg
        assert "Empty keys: EMPTY_KEY" in error_msg
