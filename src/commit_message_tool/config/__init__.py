"""
Configuration loading for commit_message_tool.

Provides a loader for the optional user configuration file holding
default tool parameters. See :mod:`commit_message_tool.config.loader`.
"""

from .loader import ConfigError, load_config  # noqa: F401
