"""Configuration manager - loads, merges and validates configuration.

Configuration is layered, later layers winning:

1. DEFAULT_CONFIG
2. A JSON file, given explicitly or through the VIEW_LOOKUP_CONFIG variable
3. Explicit overrides

String values may reference environment variables as ``${NAME}`` or
``${NAME:default}``; they are expanded before validation.
"""
import copy
import json
import os
import re
from typing import Any, Dict, Optional

from view_lookup.domain.core.exceptions import ConfigurationError
from view_lookup.infrastructure.logging.logger import get_logger

from .defaults import CONFIG_FILE_ENV, DEFAULT_CONFIG
from .schemas import AppConfig, validate_config

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand ${NAME:default} placeholders in strings."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries, recursing into nested dictionaries."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigurationManager:
    """Loads the application configuration once and serves it from memory."""

    def __init__(self,
                 config_file: Optional[str] = None,
                 overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to a JSON configuration file
            overrides: Optional configuration applied on top of everything else
        """
        self.config_file = config_file or os.environ.get(CONFIG_FILE_ENV) or None
        self.overrides = overrides or {}
        self._config: Optional[AppConfig] = None
        self._logger = get_logger(__name__)

    def get_config(self) -> AppConfig:
        """
        Get the validated configuration.

        Raises:
            ConfigurationError: If the file cannot be read or validation fails
        """
        if self._config is None:
            self._config = self._load()
        return self._config

    def reload(self) -> AppConfig:
        """Discard the loaded configuration and load it again."""
        self._config = None
        return self.get_config()

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value by dotted path, e.g. 'lookup.default_locale'."""
        value: Any = self.get_config()
        for part in path.split("."):
            value = getattr(value, part, None)
            if value is None:
                return default
        return value

    def _load(self) -> AppConfig:
        raw = copy.deepcopy(DEFAULT_CONFIG)
        if self.config_file:
            raw = deep_merge(raw, self._read_file(self.config_file))
        raw = deep_merge(raw, self.overrides)
        config = validate_config(expand_env_vars(raw))
        self._logger.debug(f"Configuration loaded (file: {self.config_file or 'none'})")
        return config

    def _read_file(self, path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        return data
