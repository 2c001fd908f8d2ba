"""
Configuration loader for commit_message_tool.

Default tool parameters can be stored in a JSON file named
``config.json`` located in the ``~/.commit_message_tool/`` directory.
The file is optional. When present it must be a JSON object using the
tool's parameter names, for example::

    {"language": "ja", "format": "detailed", "maxFiles": 20}

If the file is malformed or holds invalid values, a :class:`ConfigError`
is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from commit_message_tool.schema import RequestValidationError, validate_params


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. The CLI configures
# logging explicitly when it runs.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = "config.json"


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the user configuration."""
    return Path.home() / ".commit_message_tool"


def load_config() -> Dict[str, Any]:
    """Load default tool parameters from the user's configuration file.

    Returns
    -------
    Dict[str, Any]
        The parameters found in the file, keyed by schema name. An empty
        dictionary is returned when the file does not exist.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid JSON, is not a JSON
        object, or holds parameters rejected by the tool schema.
    """
    config_path = _get_config_directory() / CONFIG_FILE_NAME

    if not config_path.exists():
        logger.debug("No configuration file at %s, using defaults", config_path)
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    try:
        validate_params(data)
    except RequestValidationError as exc:
        logger.error("Invalid configuration values: %s", exc)
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

    logger.debug("Loaded configuration from %s: %s", config_path, data)
    return data
