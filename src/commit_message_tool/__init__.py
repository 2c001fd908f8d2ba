"""
Top-level package for commit_message_tool.

The package turns Git name-status listings into suggested commit
messages. The command line entry point lives in
``commit_message_tool.cli`` and the host-facing tool in
``commit_message_tool.tool``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
