"""
Configuration for LoginKit.

This module provides the configuration schema, defaults and application
identifiers used by QSettings.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings
APP_ORGANIZATION = "LoginKit"
APP_NAME = "Login"

EMAIL_PATTERNS = ("standard", "simple")

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Validation settings
    "password_min_length": 8,
    "email_pattern": "standard",  # Options: "standard", "simple"
    "trim_email": True,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
    # UI state
    "remember_email": False,
    "last_email": "",
}

# JSON Schema for imported configuration (draft-07)
CONFIG_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "LoginKit configuration",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "password_min_length": {"type": "integer", "minimum": 1, "maximum": 128},
        "email_pattern": {"type": "string", "enum": list(EMAIL_PATTERNS)},
        "trim_email": {"type": "boolean"},
        "log_level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
        "remember_email": {"type": "boolean"},
        "last_email": {"type": "string"},
    },
}


def get_app_config_dir() -> Path:
    """
    Get the application configuration directory using QStandardPaths.

    Returns:
        Path to the writable configuration directory for this application
    """
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    Call early in application startup so QSettings uses the right
    organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
