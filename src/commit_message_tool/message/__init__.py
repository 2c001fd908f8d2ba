"""
Commit message synthesis.

See :mod:`commit_message_tool.message.message_synthesizer`.
"""

from .message_synthesizer import generate_commit_message  # noqa: F401
