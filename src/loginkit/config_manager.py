"""
Configuration manager for LoginKit.

Provides QSettings-backed configuration management with default fallbacks
and type safety.
"""

import logging
from typing import Any

import jsonschema
from PySide6.QtCore import QSettings

from .config import CONFIG_JSON_SCHEMA, DEFAULT_CONFIG, setup_qsettings
from .errors import ConfigError, ErrorCode

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Provides type-safe access to configuration values with automatic
    fallback to defaults when keys are missing or have invalid types.
    """

    def __init__(self) -> None:
        setup_qsettings()
        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value coerced to the type of its default
        """
        fallback = default if default is not None else self._defaults.get(key)

        value = self._settings.value(key, fallback)

        if fallback is not None:
            try:
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans on some backends
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def get_checked(self, key: str) -> Any:
        """
        Get a configuration value that must satisfy its schema.

        Stored values bypass schema validation when written with set() or
        edited by hand, so a value failing its property schema is replaced
        by the default.

        Args:
            key: Configuration key present in CONFIG_JSON_SCHEMA

        Returns:
            The stored value, or the default if it is out of range
        """
        value = self.get(key)
        try:
            jsonschema.validate(value, CONFIG_JSON_SCHEMA["properties"][key])
        except jsonschema.ValidationError as e:
            logger.warning(f"Config key '{key}' is invalid ({e.message}), using default")
            value = self._defaults[key]
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key
            value: Value to store (must be JSON-serializable)
        """
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """
        Load all configuration values merged with defaults.

        Returns:
            Dictionary with every known key, stored values taking precedence
        """
        config = self._defaults.copy()
        for key in config:
            stored_value = self.get(key)
            if stored_value is not None:
                config[key] = stored_value
        return config

    def reset_to_defaults(self) -> None:
        """Clear all stored settings and revert to defaults."""
        self._settings.clear()
        self._settings.sync()

        logger.info("Configuration reset to defaults")

    def export_config(self) -> dict[str, Any]:
        """Export current configuration as a dictionary."""
        return self.load_all()

    def import_config(self, config: dict[str, Any]) -> None:
        """
        Import configuration from a dictionary after schema validation.

        Args:
            config: Dictionary containing configuration values

        Raises:
            ConfigError: If the dictionary does not match the configuration schema
        """
        try:
            jsonschema.validate(config, CONFIG_JSON_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message=f"Configuration is invalid: {e.message}",
                technical_message=str(e),
            ) from e

        for key, value in config.items():
            self.set(key, value)

        logger.info(f"Imported {len(config)} configuration keys")

    def has_key(self, key: str) -> bool:
        """Check if a configuration key exists in storage."""
        return self._settings.contains(key)

    def remove_key(self, key: str) -> None:
        """Remove a configuration key from storage."""
        self._settings.remove(key)
        self._settings.sync()
