"""
================================================================================
Global Configuration
================================================================================

Framework-level settings and logging setup for webhelper.

Features:
    - YAML settings file (config/config.yaml) with per-environment overlay
    - Environment variable overrides (SESSION__TIMEOUT=5)
    - Centralized Loguru logging configuration

The locator document (the tree that ConfigResolver walks) is a separate file;
its location is one of the settings here (``locators.file``).

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

# Directories searched for config.yaml, first match wins
CONFIG_DIRS: List[Path] = [
    Path("config"),
    Path(__file__).parent.parent.parent / "config",
]


def init_logger(level: Optional[str] = None, format_str: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """Returns the configured Loguru logger, initializing it on first use."""
    if not _logger_initialized:
        init_logger()
    return logger


def _ensure_config_loaded() -> None:
    global _config
    if not _config:
        _load_config()


def _load_config() -> None:
    """
    Loads settings from YAML files and environment variables.

    Loading order:
        1. Defaults
        2. config/config.yaml
        3. config/{ENV}.yaml
        4. Environment variables (SECTION__KEY)
    """
    global _config

    _config = _get_defaults()

    config_dir = next((d for d in CONFIG_DIRS if d.is_dir()), None)
    if config_dir is None:
        logger.debug("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "session": {
            "timeout": 10,
            "screenshots": True,
            "browser": "chromium",
            "poll_interval": 0.5,
        },
        "screenshots": {
            "dir": "screenshots",
        },
        "locators": {
            "file": os.getenv("WEBHELPER_CONFIG", "config.json"),
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides.

    Nested keys are separated with a double underscore, so
    SESSION__TIMEOUT=5 overrides session.timeout.
    """
    for key, value in os.environ.items():
        if "__" in key and not key.startswith("_"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        child = d.get(key)
        if not isinstance(child, dict):
            child = {}
            d[key] = child
        d = child
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a setting using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "session.timeout").
        default: Value returned when the key is not set.

    Examples:
        >>> get_config("session.timeout", 10)
        10
    """
    _ensure_config_loaded()

    value: Any = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config(key: str, value: Any) -> None:
    """Sets a setting at runtime."""
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config() -> None:
    """Reloads settings from files and re-initializes logging."""
    global _config, _logger_initialized
    _config = {}
    _logger_initialized = False
    _load_config()
    init_logger()
    logger.info("Configuration reloaded.")


def as_bool(value: Any) -> bool:
    """Interprets a setting that may come from an environment variable."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


__all__ = [
    "init_logger",
    "get_logger",
    "get_config",
    "set_config",
    "reload_config",
    "as_bool",
]
