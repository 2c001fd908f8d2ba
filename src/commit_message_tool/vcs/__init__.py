"""
Version control system (VCS) integration.

This package contains the Git client used to read the status and the
diffs of a working directory.
"""

from .git_client import GitClient, GitError  # noqa: F401
