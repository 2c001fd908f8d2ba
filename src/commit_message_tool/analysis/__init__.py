"""
Change analysis for commit messages.

This package turns a Git name-status listing into a
:class:`ChangeAnalysis`. See :mod:`commit_message_tool.analysis.change_analyzer`
and :mod:`commit_message_tool.analysis.analysis_model` for details.
"""

from .analysis_model import ChangeAnalysis  # noqa: F401
from .change_analyzer import analyze_changes  # noqa: F401
