# config/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the smart installer.

Handles loading settings from Pydantic model defaults, environment variables
and an optional YAML file, applying a specific order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings initialization)
3. YAML Configuration File
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "SMART_INSTALLER_CONFIG"
CONFIG_FILE_DEFAULT = "smart_installer.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with values from `overrides`.

    Nested dictionaries are merged key by key; `None` values in `overrides`
    never replace an existing value.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def resolve_config_path(config_file_path: Optional[str] = None) -> Path:
    """
    Returns the YAML config path to consult.

    An explicit path wins, then the SMART_INSTALLER_CONFIG environment
    variable, then `smart_installer.yaml` in the current directory.
    """
    if config_file_path:
        return Path(config_file_path).expanduser()
    env_path = os.environ.get(CONFIG_FILE_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / CONFIG_FILE_DEFAULT


def load_yaml_config(
    yaml_config_path: Path, current_logger: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """
    Reads a YAML mapping from `yaml_config_path`.

    A missing, unreadable or malformed file is logged and yields an empty
    dict so that defaults and environment variables still apply.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults and environment variables."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data and isinstance(yaml_data, dict):
        logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
        return yaml_data
    if yaml_data is not None:
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
    return {}


def load_app_settings(
    config_file_path: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (BaseSettings loads these, e.g. BRANCH, LOG_LEVEL).
    3. Values from the YAML configuration file, if one exists (highest
       precedence, overrides all else).

    Args:
        config_file_path: Path to the YAML configuration file. Resolved via
            `resolve_config_path` when omitted.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        settings_after_env_and_defaults = AppSettings()
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )

    yaml_data = load_yaml_config(
        resolve_config_path(config_file_path), logger_to_use
    )
    if yaml_data:
        current_values_dict = _deep_update(current_values_dict, yaml_data)

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
