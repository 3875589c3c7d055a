"""
Configuration for the Mapbox client.

Settings are read from the process environment, which ``load_config`` can
populate from a .env file. The numeric accessors never raise: an
unparsable value is logged and replaced by the caller's default.
"""

import os
import logging
from typing import Callable, Dict, List, Optional, TypeVar
from dotenv import load_dotenv


logger = logging.getLogger(__name__)

TOKEN_KEY = "MAPBOX_TOKEN"
BASE_URL_KEY = "MAPBOX_BASE_URL"
REQUEST_TIMEOUT_KEY = "MAPBOX_REQUEST_TIMEOUT"
RATE_LIMIT_KEY = "MAPBOX_RATE_LIMIT_PER_SEC"
BURST_CAPACITY_KEY = "MAPBOX_BURST_CAPACITY"
MAX_WORKERS_KEY = "MAPBOX_MAX_WORKERS"
CACHE_DIR_KEY = "MAPBOX_CACHE_DIR"
LOG_LEVEL_KEY = "MAPBOX_LOG_LEVEL"
LOG_FILE_KEY = "MAPBOX_LOG_FILE"

SETTINGS = (
    TOKEN_KEY,
    BASE_URL_KEY,
    REQUEST_TIMEOUT_KEY,
    RATE_LIMIT_KEY,
    BURST_CAPACITY_KEY,
    MAX_WORKERS_KEY,
    CACHE_DIR_KEY,
    LOG_LEVEL_KEY,
    LOG_FILE_KEY,
)

T = TypeVar("T")


class ConfigError(Exception):
    """Raised when a required setting is missing or blank."""
    pass


def load_config(env_path: str = ".env") -> bool:
    """
    Export the variables of a .env file into the environment.

    Values from the file replace variables that are already set.

    Args:
        env_path: Path to the .env file (default: ".env")

    Returns:
        True if the file existed and was loaded
    """
    if not os.path.isfile(env_path):
        logger.warning(f"Configuration file {env_path} not found, using system environment variables only")
        return False

    load_dotenv(env_path, override=True)
    logger.info(f"Loaded configuration from {env_path}")
    return True


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the raw value of ``key``, or ``default`` when it is unset."""
    value = os.environ.get(key)
    if value is None:
        logger.debug(f"Configuration key '{key}' not set, using {default!r}")
        return default
    return value


def _get_typed(key: str, default: T, cast: Callable[[str], T], kind: str) -> T:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Configuration key '{key}' has invalid {kind} value {raw!r}, using {default}")
        return default


def get_config_int(key: str, default: int) -> int:
    return _get_typed(key, default, int, "integer")


def get_config_float(key: str, default: float) -> float:
    return _get_typed(key, default, float, "numeric")


def config_summary() -> Dict[str, Optional[str]]:
    """Current value of every client setting, with the access token masked."""
    summary = {key: os.environ.get(key) for key in SETTINGS}
    token = summary[TOKEN_KEY]
    if token:
        summary[TOKEN_KEY] = f"{token[:6]}..."
    return summary


def validate_config(required_keys: List[str]) -> None:
    """
    Check that every key in ``required_keys`` is set to a non-blank value.

    Raises:
        ConfigError: Naming the missing and the blank keys
    """
    missing_keys = [key for key in required_keys if os.environ.get(key) is None]
    empty_keys = [key for key in required_keys
                  if key not in missing_keys and not os.environ[key].strip()]

    if missing_keys or empty_keys:
        problems = []
        if missing_keys:
            problems.append(f"Missing keys: {', '.join(missing_keys)}.")
        if empty_keys:
            problems.append(f"Empty keys: {', '.join(empty_keys)}.")

        error_msg = "Configuration validation failed: " + " ".join(problems)
        logger.error(error_msg)
        raise ConfigError(error_msg)

    logger.info(f"Configuration validation passed for keys: {', '.join(required_keys)}")
