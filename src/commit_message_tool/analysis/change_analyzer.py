"""
Heuristics for summarising a Git name-status listing.

The analyzer reads ``STATUS<TAB>PATH`` records (as printed by
``git diff --name-status``), sorts the paths into change kinds, collects
the touched file extensions and flags which categories of files
(tests, documentation, configuration, source code) changed. It never
looks at diff content, only at status letters and paths, so it is fully
deterministic and can be unit tested without a repository.

Only the first ``max_files`` records are analysed. When a change set is
larger than that, the resulting statistics describe the leading records
only, not the whole change set.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from commit_message_tool.analysis.analysis_model import ChangeAnalysis


logger = logging.getLogger(__name__)
# Attach a null handler to prevent logging errors when no handlers are
# configured on the root logger. The CLI re-enables propagation.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_MAX_FILES = 10

DOC_EXTENSIONS = {"md", "txt", "rst"}
CONFIG_EXTENSIONS = {"json", "yaml", "yml", "toml"}
SOURCE_EXTENSIONS = {"ts", "js", "py", "java", "cpp", "c", "go", "rs"}

# Status letter -> change kind. Other letters (copies, type changes,
# unmerged entries) are not bucketed.
STATUS_KINDS = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
}

FilePredicate = Callable[[str, Optional[str]], bool]
CountsPredicate = Callable[[Dict[str, int]], bool]

# Evaluated in order, the first matching rule decides the category of a
# single file.
CATEGORY_RULES: List[Tuple[FilePredicate, str]] = [
    (lambda path, ext: "test" in path or "spec" in path, "test"),
    (lambda path, ext: ext in DOC_EXTENSIONS, "doc"),
    (lambda path, ext: ext in CONFIG_EXTENSIONS or "config" in path, "config"),
    (lambda path, ext: ext in SOURCE_EXTENSIONS, "source"),
]

# Evaluated in order against the per-kind counts. Renames are ignored by
# the first three rules.
PRIMARY_TYPE_RULES: List[Tuple[CountsPredicate, str]] = [
    (lambda c: c["added"] > 0 and c["modified"] == 0 and c["deleted"] == 0, "add"),
    (lambda c: c["deleted"] > 0 and c["added"] == 0 and c["modified"] == 0, "remove"),
    (lambda c: c["modified"] > 0 and c["added"] == 0 and c["deleted"] == 0, "update"),
    (lambda c: c["renamed"] > 0, "refactor"),
]
FALLBACK_PRIMARY_TYPE = "mixed"


def extract_extension(file_path: str) -> Optional[str]:
    """Return the lower-case text after the last ``.`` of ``file_path``.

    ``None`` is returned when the path contains no dot or ends with one.
    """
    if "." not in file_path:
        return None
    ext = file_path.rsplit(".", 1)[1].lower()
    return ext or None


def categorize_file(file_path: str, ext: Optional[str]) -> Optional[str]:
    """Return the category of a single file, or ``None`` if no rule matches."""
    for predicate, category in CATEGORY_RULES:
        if predicate(file_path, ext):
            return category
    return None


def determine_primary_change_type(counts: Dict[str, int]) -> str:
    """Derive the primary change type from the number of paths per kind."""
    for predicate, change_type in PRIMARY_TYPE_RULES:
        if predicate(counts):
            return change_type
    return FALLBACK_PRIMARY_TYPE


def parse_record(line: str) -> Tuple[str, str]:
    """Split a name-status line into ``(status, path)`` on its first tab.

    For renames the path keeps the remaining ``old<TAB>new`` text.
    """
    status, _, file_path = line.partition("\t")
    return status, file_path


def analyze_changes(name_status: str, max_files: int = DEFAULT_MAX_FILES) -> ChangeAnalysis:
    """Summarise a name-status listing.

    Parameters
    ----------
    name_status : str
        Output of ``git diff --name-status``; one ``STATUS<TAB>PATH``
        record per line. Rename records carry a similarity score after
        the status letter (``R100``).
    max_files : int
        Number of leading records to analyse. Later records are ignored
        and do not contribute to any statistic.

    Returns
    -------
    ChangeAnalysis
        The summary. Malformed lines are skipped; empty input yields empty
        collections and the ``mixed`` primary change type.
    """
    lines: Sequence[str] = name_status.strip().split("\n")[:max_files]

    buckets: Dict[str, List[str]] = {kind: [] for kind in STATUS_KINDS.values()}
    file_types: List[str] = []
    categories = set()

    for line in lines:
        status, file_path = parse_record(line)
        if not file_path:
            continue

        kind = STATUS_KINDS.get(status[:1])
        if kind is not None:
            buckets[kind].append(file_path)

        ext = extract_extension(file_path)
        if ext and ext not in file_types:
            file_types.append(ext)

        category = categorize_file(file_path, ext)
        if category is not None:
            categories.add(category)

    counts = {kind: len(paths) for kind, paths in buckets.items()}
    primary = determine_primary_change_type(counts)
    logger.debug("Analysed %d record(s): %s -> %s", len(lines), counts, primary)

    return ChangeAnalysis(
        modified=tuple(buckets["modified"]),
        added=tuple(buckets["added"]),
        deleted=tuple(buckets["deleted"]),
        renamed=tuple(buckets["renamed"]),
        file_types=tuple(file_types),
        has_test_changes="test" in categories,
        has_doc_changes="doc" in categories,
        has_config_changes="config" in categories,
        has_source_changes="source" in categories,
        primary_change_type=primary,
    )
