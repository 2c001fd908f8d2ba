"""
Data models for change analysis.

The :class:`ChangeAnalysis` summarises one name-status listing: which
paths were modified, added, deleted or renamed, which file extensions
were touched, which categories of files changed, and the derived
primary change type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ChangeAnalysis:
    """Summary of a set of file changes.

    Attributes
    ----------
    modified, added, deleted, renamed : Tuple[str, ...]
        Paths per change kind, in input order.
    file_types : Tuple[str, ...]
        Distinct lower-case extensions in first-seen order.
    has_test_changes, has_doc_changes, has_config_changes, has_source_changes : bool
        Category flags. Several can be set at once, but every file sets
        at most one of them.
    primary_change_type : str
        One of ``add``, ``remove``, ``update``, ``refactor`` or ``mixed``.
    """

    modified: Tuple[str, ...] = ()
    added: Tuple[str, ...] = ()
    deleted: Tuple[str, ...] = ()
    renamed: Tuple[str, ...] = ()
    file_types: Tuple[str, ...] = ()
    has_test_changes: bool = False
    has_doc_changes: bool = False
    has_config_changes: bool = False
    has_source_changes: bool = False
    primary_change_type: str = "mixed"
