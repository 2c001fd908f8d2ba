"""
The ``generate_commit_message`` tool.

:func:`generate_commit_message_tool` runs the Git commands in a fixed
order against an explicit working directory, each step gated on the
previous one:

1. repository check (stop with an error outside a Git repository),
2. porcelain status (stop with a "clean" message when empty),
3. diff statistics of the staged changes, or of all changes against
   ``HEAD`` when ``includeUnstaged`` is set (stop when empty),
4. name-status diff for the same scope, which feeds the analyzer and
   the message synthesizer.

Clean trees and missing staged changes are successful results; only real
failures set the error flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from commit_message_tool.analysis.analysis_model import ChangeAnalysis
from commit_message_tool.analysis.change_analyzer import analyze_changes
from commit_message_tool.message.message_synthesizer import generate_commit_message
from commit_message_tool.schema import RequestValidationError, validate_params
from commit_message_tool.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


NO_WORKING_DIRECTORY = "No working directory found. Please provide a repository path."
NOT_A_REPOSITORY = "Current directory is not a git repository."
WORKING_TREE_CLEAN = "No changes to commit. Working directory is clean."
NO_CHANGES = "No changes found in the repository."
NO_STAGED_CHANGES = (
    'No staged changes found. Use "git add" to stage changes or set includeUnstaged to true.'
)


@dataclass(frozen=True)
class CommitMessageResult:
    """Outcome of a tool call: an error flag and one text block."""

    is_error: bool
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the envelope expected by the host application."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def format_result_text(diff_stat: str, message: str, analysis: ChangeAnalysis) -> str:
    """Render the diff statistics, the suggested message and the change summary."""
    return (
        "\n"
        "**Analyzed Changes:**\n"
        f"{diff_stat}\n"
        "\n"
        "**Suggested Commit Message:**\n"
        "```\n"
        f"{message}\n"
        "```\n"
        "\n"
        "**Change Summary:**\n"
        f"- Modified files: {len(analysis.modified)}\n"
        f"- Added files: {len(analysis.added)}\n"
        f"- Deleted files: {len(analysis.deleted)}\n"
        f"- File types: {', '.join(analysis.file_types)}\n"
        f"- Primary change type: {analysis.primary_change_type}\n"
    )


def generate_commit_message_tool(
    repo_root: Optional[Union[str, Path]],
    params: Optional[Mapping[str, Any]] = None,
    client_factory: Callable[[Path], GitClient] = GitClient,
) -> CommitMessageResult:
    """Suggest a commit message for the changes in ``repo_root``.

    Parameters
    ----------
    repo_root : str or Path, optional
        Working directory to inspect.
    params : Mapping, optional
        Tool parameters using the schema keys (``includeUnstaged``,
        ``maxFiles``, ``language``, ``format``).
    client_factory : callable
        Builds the Git client for ``repo_root``.

    Returns
    -------
    CommitMessageResult
        Never raises; failures are reported with ``is_error`` set.
    """
    if repo_root is None or not Path(repo_root).is_dir():
        logger.error("Working directory unavailable: %s", repo_root)
        return CommitMessageResult(is_error=True, text=NO_WORKING_DIRECTORY)

    try:
        request = validate_params(params)
    except RequestValidationError as exc:
        return CommitMessageResult(is_error=True, text=f"Invalid parameters: {exc}")

    try:
        client = client_factory(Path(repo_root))

        if not client.is_repository():
            logger.info("%s is not a Git repository", repo_root)
            return CommitMessageResult(is_error=True, text=NOT_A_REPOSITORY)

        if client.status_porcelain().strip() == "":
            return CommitMessageResult(is_error=False, text=WORKING_TREE_CLEAN)

        diff_stat = client.diff_stat(request.include_unstaged)
        if diff_stat.strip() == "":
            text = NO_CHANGES if request.include_unstaged else NO_STAGED_CHANGES
            return CommitMessageResult(is_error=False, text=text)

        name_status = client.diff_name_status(request.include_unstaged)
        analysis = analyze_changes(name_status, request.max_files)
        message = generate_commit_message(analysis, language=request.language, format=request.format)
        logger.debug("Suggested commit message: %s", message)

        return CommitMessageResult(
            is_error=False,
            text=format_result_text(diff_stat, message, analysis),
        )
    except Exception as exc:
        logger.exception("Unhandled error while generating commit message: %s", exc)
        return CommitMessageResult(
            is_error=True,
            text=f"Error generating commit message: {exc}",
        )


def generate_commit_message_tool_handler(
    params: Optional[Mapping[str, Any]],
    repo_root: Optional[Union[str, Path]],
) -> Dict[str, Any]:
    """Host entry point: run the tool and return the result envelope."""
    return generate_commit_message_tool(repo_root, params).to_dict()
