"""
Commit message synthesis from a change analysis.

This module provides :func:`generate_commit_message`, which turns a
:class:`~commit_message_tool.analysis.ChangeAnalysis` into a commit
message. It first picks a Conventional Commit type and a description
from the changed file categories, then infers an optional scope from
the paths, refines the description when a single file stands out, and
finally renders one of three formats:

  conventional:  type(scope): description
  simple:        Description
  detailed:      type(scope): description

                 Files changed: a.ts, b.ts, ...

English (``en``) and Japanese (``ja``) descriptions are supported.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Tuple

from commit_message_tool.analysis.analysis_model import ChangeAnalysis


logger = logging.getLogger(__name__)
# Attach a null handler to prevent logging errors when no handlers are
# configured on the root logger. The CLI re-enables propagation.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


LANGUAGES = ("en", "ja")
FORMATS = ("conventional", "simple", "detailed")

# Number of paths listed by the detailed format.
DETAILED_FILE_PREVIEW = 5

DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "tests": {"en": "add/update tests", "ja": "テストを追加・更新"},
    "docs": {"en": "update documentation", "ja": "ドキュメントを更新"},
    "config": {"en": "update configuration", "ja": "設定ファイルを更新"},
    "add": {"en": "add new feature", "ja": "新機能を追加"},
    "remove": {"en": "remove feature", "ja": "機能を削除"},
    "refactor": {"en": "refactor code", "ja": "コードをリファクタリング"},
    "update": {"en": "improve functionality", "ja": "機能を改善"},
    "mixed": {"en": "implement multiple changes", "ja": "複数の変更を実装"},
}

VERBS: Dict[str, Dict[str, str]] = {
    "add": {"en": "add", "ja": "追加"},
    "update": {"en": "update", "ja": "更新"},
}

MORE_FILES_SUFFIX = {"en": " and more", "ja": " など"}

AnalysisPredicate = Callable[[ChangeAnalysis], bool]

# Evaluated in order; the first match decides the commit type and the
# description key.
TYPE_RULES: List[Tuple[AnalysisPredicate, Tuple[str, str]]] = [
    (lambda a: a.has_test_changes and not a.has_source_changes, ("test", "tests")),
    (
        lambda a: a.has_doc_changes and not a.has_source_changes and not a.has_test_changes,
        ("docs", "docs"),
    ),
    (lambda a: a.has_config_changes and not a.has_source_changes, ("chore", "config")),
    (lambda a: a.primary_change_type == "add", ("feat", "add")),
    (lambda a: a.primary_change_type == "remove", ("feat", "remove")),
    (lambda a: a.primary_change_type == "refactor", ("refactor", "refactor")),
    (lambda a: a.primary_change_type == "update", ("fix", "update")),
]
FALLBACK_TYPE = ("feat", "mixed")

# Path keyword -> scope label, first match wins.
SCOPE_KEYWORDS: List[Tuple[str, str]] = [
    ("tool", "tools"),
    ("extension", "extension"),
    ("relay", "relay"),
]
SCOPE_FILE_TYPES = {"ts", "js"}

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def select_type(analysis: ChangeAnalysis, language: str = "en") -> Tuple[str, str]:
    """Return ``(commit_type, description)`` for ``analysis``."""
    commit_type, key = FALLBACK_TYPE
    for predicate, outcome in TYPE_RULES:
        if predicate(analysis):
            commit_type, key = outcome
            break
    return commit_type, DESCRIPTIONS[key][language]


def infer_scope(analysis: ChangeAnalysis) -> str:
    """Infer a scope label from the modified and added paths.

    A scope is only considered when TypeScript or JavaScript files were
    touched. An empty string means no scope.
    """
    if not SCOPE_FILE_TYPES.intersection(analysis.file_types):
        return ""
    paths = analysis.modified + analysis.added
    for keyword, scope in SCOPE_KEYWORDS:
        if any(keyword in path for path in paths):
            return scope
    return ""


def file_stem(file_path: str) -> str:
    """Return the file name of ``file_path`` without directory and last extension."""
    name = file_path.split("/")[-1]
    return _EXTENSION_RE.sub("", name)


def refine_description(analysis: ChangeAnalysis, description: str, language: str = "en") -> str:
    """Describe a single stand-out file instead of the generic description.

    Applies when exactly one file was modified or exactly one was added.
    The verb follows the primary change type only, so it can disagree
    with the commit type chosen by :func:`select_type`.
    """
    if len(analysis.modified) != 1 and len(analysis.added) != 1:
        return description

    changed_file = (analysis.modified or analysis.added)[0]
    name = file_stem(changed_file)
    verb = VERBS["add" if analysis.primary_change_type == "add" else "update"][language]

    if language == "ja":
        if "tool" in name:
            return f"{name}ツールを{verb}"
        if name == "README":
            return "READMEを更新"
        return f"{name}を{verb}"

    if "tool" in name:
        return f"{verb} {name} tool"
    if name == "README":
        return "update README"
    return f"{verb} {name}"


def _header(commit_type: str, scope: str, description: str) -> str:
    if scope:
        return f"{commit_type}({scope}): {description}"
    return f"{commit_type}: {description}"


def _files_changed(analysis: ChangeAnalysis, language: str) -> str:
    files = analysis.modified + analysis.added + analysis.deleted
    files_text = ", ".join(files[:DETAILED_FILE_PREVIEW])
    more = MORE_FILES_SUFFIX[language] if len(files) > DETAILED_FILE_PREVIEW else ""
    return f"Files changed: {files_text}{more}"


def generate_commit_message(
    analysis: ChangeAnalysis,
    language: str = "en",
    format: str = "conventional",
) -> str:
    """Generate a commit message for ``analysis``.

    Parameters
    ----------
    analysis : ChangeAnalysis
        Summary produced by :func:`~commit_message_tool.analysis.analyze_changes`.
    language : str
        ``en`` or ``ja``.
    format : str
        ``conventional``, ``simple`` or ``detailed``. Unknown formats fall
        back to ``type: description``.

    Returns
    -------
    str
        The formatted commit message.

    Raises
    ------
    ValueError
        If ``language`` is not supported.
    """
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")

    commit_type, description = select_type(analysis, language)
    scope = infer_scope(analysis)
    description = refine_description(analysis, description, language)
    logger.debug("Commit type=%s scope=%r description=%r", commit_type, scope, description)

    if format == "conventional":
        return _header(commit_type, scope, description)
    if format == "simple":
        return description[:1].upper() + description[1:]
    if format == "detailed":
        return f"{_header(commit_type, scope, description)}\n\n{_files_changed(analysis, language)}"
    return f"{commit_type}: {description}"
