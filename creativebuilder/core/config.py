"""
Configuration management utilities for the creativebuilder package.

This module provides functions for loading and accessing configuration settings.

Configuration Hierarchy:
1. Default configuration (creativebuilder/core/default_config.json) - Base settings
2. User configuration (~/.creativebuilder/config.json) - User-specific overrides
3. Runtime overrides - Temporary changes made via set_config_value(..., save=False)

The user configuration only needs to contain the keys it overrides; it is
deep-merged into the defaults.
"""

import os
import json
from typing import Dict, Any

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.json")
USER_CONFIG_PATH = os.path.expanduser("~/.creativebuilder/config.json")

# Configuration singleton
_config_cache = {}


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Get the configuration dictionary, loading it if necessary.

    Args:
        reload (bool): Force reload the configuration even if cached

    Returns:
        Dict[str, Any]: The configuration dictionary
    """
    global _config_cache

    if not _config_cache or reload:
        _config_cache = load_config()

    return _config_cache


def load_config() -> Dict[str, Any]:
    """
    Load configuration from the default and user-specific files.

    Returns:
        Dict[str, Any]: The merged configuration dictionary
    """
    config = {}

    if os.path.exists(DEFAULT_CONFIG_PATH):
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            config.update(json.load(f))

    if os.path.exists(USER_CONFIG_PATH):
        with open(USER_CONFIG_PATH, 'r') as f:
            deep_merge(config, json.load(f))

    return config


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """
    Recursively merge override dictionary into base dictionary.

    If a key exists in both dictionaries and both values are dictionaries,
    they are merged recursively; otherwise the override value wins.

    Args:
        base (Dict[str, Any]): Base dictionary to be updated
        override (Dict[str, Any]): Dictionary with values to override
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value


def load_user_config() -> Dict[str, Any]:
    """Return only the user overrides, or an empty dict when there are none."""
    if not os.path.exists(USER_CONFIG_PATH):
        return {}
    with open(USER_CONFIG_PATH, 'r') as f:
        return json.load(f)


def save_user_config(config: Dict[str, Any]) -> None:
    """
    Save user configuration to the user config file.

    Only user overrides should be passed here; they are merged with the
    defaults again when loaded.

    Args:
        config (Dict[str, Any]): Configuration dictionary to save
    """
    os.makedirs(os.path.dirname(USER_CONFIG_PATH), exist_ok=True)

    with open(USER_CONFIG_PATH, 'w') as f:
        json.dump(config, f, indent=2)

    global _config_cache
    _config_cache = load_config()


def _get_nested(config: Dict[str, Any], key: str, default: Any) -> Any:
    current = config
    for part in key.split('.'):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default
    return current


def _set_nested(config: Dict[str, Any], key: str, value: Any) -> None:
    parts = key.split('.')
    current = config
    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value by key.

    Dot notation accesses nested values, so 'video_generation.poll_interval'
    reads config['video_generation']['poll_interval'].

    Examples:
        >>> get_config_value('text_generation.model', 'google/gemini-2.5-flash')
        'google/gemini-2.5-flash'

        >>> get_config_value('nonexistent.key', 'default-value')
        'default-value'

    Args:
        key (str): The configuration key (can use dot notation for nested keys)
        default (Any): Default value if key is not found

    Returns:
        Any: The configuration value or default
    """
    return _get_nested(get_config(), key, default)


def set_config_value(key: str, value: Any, save: bool = True) -> None:
    """
    Set a specific configuration value by key.

    When ``save`` is True the value is also written to the user configuration
    file so it persists across runs; otherwise it only affects this process.

    Args:
        key (str): The configuration key (can use dot notation for nested keys)
        value (Any): The value to set
        save (bool): Whether to persist the value to the user config file
    """
    global _config_cache

    if save:
        user_config = load_user_config()
        _set_nested(user_config, key, value)
        save_user_config(user_config)
        return

    config = get_config()
    _set_nested(config, key, value)
    _config_cache = config
