"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.cmsclient/config.yaml). Loading is lazy: the first
`get_config` call triggers it, importing this module has no side effects.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".cmsclient"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

DEFAULT_API_VERSION = "v1"
DEFAULT_RATE_LIMIT_REQUESTS = 10
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 1.0
DEFAULT_DELIVERY_MAX_PAGE_SIZE = 100
DELIVERY_MAX_PAGE_SIZE_CEILING = 1000

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('api.rate_limit.requests')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Test overrides (set_config_for_testing)
    2. Environment Variables
    3. .env file
    4. YAML configuration file
    5. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False keeps real environment variables on top
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    _loaded = True
    logger.debug("Configuration loading process completed.")


def reset_configuration() -> None:
    """Forgets loaded values so the next access reloads them."""
    global _config, _loaded
    _config = {}
    _loaded = False


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (key upper-cased, dots replaced by underscores)
    3. .env / YAML config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value. Environment values stay strings; the typed
        getters below convert them.
    """
    if key in _test_config:
        return _test_config[key]

    load_configuration()

    env_key = key.upper().replace(".", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_management_token() -> Optional[str]:
    """Convenience function to get the management API access token."""
    # Checks ENV CONTENTFUL_MANAGEMENT_TOKEN first, then yaml management.access_token
    token = get_config("CONTENTFUL_MANAGEMENT_TOKEN") or get_config("management.access_token")
    return str(token) if token is not None else None


def get_delivery_token() -> Optional[str]:
    """Convenience function to get the delivery API access token."""
    token = get_config("CONTENTFUL_DELIVERY_TOKEN") or get_config("delivery.access_token")
    return str(token) if token is not None else None


def get_api_version() -> str:
    version = get_config("api.version", DEFAULT_API_VERSION)
    return str(version) if version else DEFAULT_API_VERSION


def get_rate_limit() -> Tuple[int, float]:
    """Returns (max_requests, window_seconds) for the client-side rate limiter."""
    requests = get_config("api.rate_limit.requests", DEFAULT_RATE_LIMIT_REQUESTS)
    window = get_config("api.rate_limit.window_seconds", DEFAULT_RATE_LIMIT_WINDOW_SECONDS)
    try:
        return int(requests), float(window)
    except (TypeError, ValueError):
        logger.warning(f"Invalid rate limit settings ({requests!r}, {window!r}). Using defaults.")
        return DEFAULT_RATE_LIMIT_REQUESTS, DEFAULT_RATE_LIMIT_WINDOW_SECONDS


def get_delivery_max_page_size() -> int:
    """Delivery page ceiling; values above the API's hard limit are capped."""
    size = get_config("delivery.max_page_size", DEFAULT_DELIVERY_MAX_PAGE_SIZE)
    try:
        size = int(size)
    except (TypeError, ValueError):
        logger.warning(f"Invalid delivery.max_page_size {size!r}. Using {DEFAULT_DELIVERY_MAX_PAGE_SIZE}.")
        return DEFAULT_DELIVERY_MAX_PAGE_SIZE
    if size <= 0:
        return DEFAULT_DELIVERY_MAX_PAGE_SIZE
    return min(size, DELIVERY_MAX_PAGE_SIZE_CEILING)


def get_request_timeout() -> Optional[float]:
    timeout = get_config("api.timeout_seconds")
    if timeout is None:
        return None
    try:
        return float(timeout)
    except (TypeError, ValueError):
        logger.warning(f"Invalid api.timeout_seconds {timeout!r}. Requests will not time out.")
        return None


def get_log_settings() -> Dict[str, Any]:
    """Returns the logging.level / logging.file / logging.format settings."""
    return {
        "level": get_config("logging.level", "WARNING"),
        "file": get_config("logging.file"),
        "format": get_config("logging.format"),
    }


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
