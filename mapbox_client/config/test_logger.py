"""
Unit tests for logger_module.py.

Tests cover:
- Logger initialization and handler attachment
- Optional file output
- Idempotency of initialization
- Convenience logging methods
"""

import logging
from unittest.mock import patch, MagicMock
import pytest

from . import logger_module
from .config_module import get_config_int
from .logger_module import (
    LOGGER_NAME,
    initialize_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the package logger before and after each test."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger_module._logger_initialized = False
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger_module._logger_initialized = False


def _flush():
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()


class TestInitializeLogger:
    """Test cases for initialize_logger function."""

    def test_console_only_by_default(self):
        initialize_logger()

        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)

    def test_with_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "mapbox.log"

        initialize_logger(log_file=str(log_file))

        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 2
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert log_file.exists()

    def test_invalid_level_defaults_to_info(self):
        initialize_logger(log_level="INVALID")
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_idempotency(self, tmp_path):
        log_file = tmp_path / "test.log"

        initialize_logger(log_file=str(log_file))
        initialize_logger(log_file=str(log_file))
        initialize_logger(log_level="DEBUG", log_file=str(log_file))

        assert len(logging.getLogger(LOGGER_NAME).handlers) == 2

    def test_does_not_touch_root_logger(self):
        root_handlers = list(logging.getLogger().handlers)
        initialize_logger()
        assert logging.getLogger().handlers == root_handlers


class TestConvenienceMethods:
    """Test cases for convenience logging methods."""

    def test_messages_written_to_file(self, tmp_path):
        log_file = tmp_path / "test.log"
        initialize_logger(log_level="DEBUG", log_file=str(log_file))

        log_debug("Test debug message")
        log_info("Test info message")
        log_warning("Test warning message")
        log_error("Test error message")
        _flush()

        content = log_file.read_text()
        assert "Test debug message" in content
        assert "Test info message" in content
        assert "WARNING" in content
        assert "Test error message" in content

    def test_levels_respected(self, tmp_path):
        log_file = tmp_path / "test.log"
        initialize_logger(log_level="WARNING", log_file=str(log_file))

        log_info("Info message")
        log_warning("Warning message")
        _flush()

        content = log_file.read_text()
        assert "Info message" not in content
        assert "Warning message" in content

    def test_before_initialization(self):
        """Convenience methods never fail before initialize_logger."""
        log_warning("Warning without initialization")

    @patch('logging.getLogger')
    def test_methods_use_package_logger(self, mock_get_logger):
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        log_info("info message")
        log_warning("warning message")
        log_error("error message")

        mock_get_logger.assert_called_with(LOGGER_NAME)
        mock_logger.info.assert_called_once_with("info message")
        mock_logger.warning.assert_called_once_with("warning message")
        mock_logger.error.assert_called_once_with("error message")

    def test_module_loggers_reach_package_handlers(self, tmp_path, monkeypatch):
        """Modules logging under mapbox_client.* end up in the package log file."""
        log_file = tmp_path / "test.log"
        initialize_logger(log_file=str(log_file))
        monkeypatch.setenv("MAPBOX_MAX_WORKERS", "lots")

        assert get_config_int("MAPBOX_MAX_WORKERS", 8) == 8
        _flush()

        content = log_file.read_text()
        assert "config_module.py" in content
        assert "invalid integer value 'lots'" in content
