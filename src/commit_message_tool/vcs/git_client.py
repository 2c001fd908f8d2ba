"""
Git client implementation for commit_message_tool.

This module wraps the few read-only Git commands needed to suggest a
commit message: a repository check, the porcelain status and the
``--stat``/``--name-status`` diffs of either the staged changes or all
changes against ``HEAD``. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. The CLI re-enables propagation when it sets up logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


NOT_A_REPOSITORY_MARKER = "not a git repository"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading changes from a Git working directory."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Messages are forced to the C locale so that markers such as
        ``not a git repository`` can be matched. Paths are printed
        verbatim (``core.quotePath=false``) rather than quoted and
        octal-escaped.

        Raises
        ------
        GitError
            If Git cannot be executed, or if the command exits with a
            non-zero status when ``check`` is True.
        """
        # Keep non-ASCII paths unquoted in diff and status listings.
        full_cmd = ["git", "-c", "core.quotePath=false"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                env={**os.environ, "LC_ALL": "C"},
            )
        except OSError as e:
            logger.error("Unable to execute Git: %s", e)
            raise GitError(f"Failed to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Repository detection
    # ------------------------------------------------------------------
    def repository_check(self) -> str:
        """Return the combined output of ``git rev-parse --git-dir``.

        The command is not checked; outside a repository the output
        carries Git's ``not a git repository`` message.
        """
        result = self._run(["rev-parse", "--git-dir"], check=False)
        return (result.stdout or "") + (result.stderr or "")

    def is_repository(self) -> bool:
        """Return False if Git reports that the directory is not a repository."""
        return NOT_A_REPOSITORY_MARKER not in self.repository_check()

    # ------------------------------------------------------------------
    # Status and diffs
    # ------------------------------------------------------------------
    def status_porcelain(self) -> str:
        """Return the output of ``git status --porcelain``."""
        return self._run(["status", "--porcelain"], check=True).stdout

    @staticmethod
    def _diff_args(include_unstaged: bool, mode: str) -> List[str]:
        if include_unstaged:
            return ["diff", "HEAD", mode]
        return ["diff", "--cached", mode]

    def diff_stat(self, include_unstaged: bool = False) -> str:
        """Return the condensed diff statistics.

        Parameters
        ----------
        include_unstaged : bool
            Diff the working tree against ``HEAD`` instead of only the
            staged changes.
        """
        return self._run(self._diff_args(include_unstaged, "--stat"), check=True).stdout

    def diff_name_status(self, include_unstaged: bool = False) -> str:
        """Return the ``--name-status`` listing for the same scope as :meth:`diff_stat`."""
        return self._run(self._diff_args(include_unstaged, "--name-status"), check=True).stdout
