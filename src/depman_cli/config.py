"""Configuration management for depman."""

import json
import logging
import os
from typing import Any, Dict

CONFIG_DIR = os.path.expanduser("~/.depman")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "manifest_file": "depman.yml",
    "lockfile": "depman.lock",
    "log_level": "WARNING",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def ensure_config_exists() -> None:
    """Ensure the configuration directory and file exist."""
    if not os.path.exists(CONFIG_DIR):
        os.makedirs(CONFIG_DIR)

    if not os.path.exists(CONFIG_FILE):
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(DEFAULT_CONFIG, f, indent=2)


def get_config() -> Dict[str, Any]:
    """Get the current configuration, with defaults for missing keys.

    Returns:
        dict: Current configuration
    """
    ensure_config_exists()
    with open(CONFIG_FILE, "r", encoding="utf-8") as f:
        try:
            stored = json.load(f)
        except json.JSONDecodeError:
            stored = {}
    config = dict(DEFAULT_CONFIG)
    if isinstance(stored, dict):
        config.update(stored)
    return config


def update_config(updates: Dict[str, Any]) -> None:
    """Update the configuration with new values.

    Args:
        updates: Dictionary of configuration values to update
    """
    config = get_config()
    config.update(updates)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def get_manifest_filename() -> str:
    return get_config()["manifest_file"]


def get_lockfile_filename() -> str:
    return get_config()["lockfile"]


def get_log_level() -> int:
    """Get the configured log level as a logging constant.

    Unknown values fall back to WARNING.
    """
    level = str(get_config().get("log_level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        return logging.WARNING
    return getattr(logging, level)


def set_log_level(level: str) -> None:
    """Set the log level.

    Raises:
        ValueError: If level is not a known logging level name
    """
    normalized = level.upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Choose from: {', '.join(LOG_LEVELS)}")
    update_config({"log_level": normalized})
