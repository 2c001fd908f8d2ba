"""
Tool descriptor and request validation for ``generate_commit_message``.

The host application discovers tools through static descriptors: a
name, a description and a JSON schema of the accepted parameters.
:data:`TOOLS` holds the descriptor of the tool implemented by this
package. :func:`validate_params` checks host parameters against the same
schema and turns them into a :class:`CommitMessageRequest`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


TOOL_NAME = "generate_commit_message"

GENERATE_COMMIT_MESSAGE_TOOL: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": (
        "Generate commit messages based on Git changes in the current repository.\n"
        "This tool analyzes staged changes (or all changes if includeUnstaged is true) and suggests\n"
        "appropriate commit messages following conventional commit format or other specified formats.\n"
        "\n"
        "Features:\n"
        "- Analyzes file changes and types to suggest appropriate commit types\n"
        "- Supports multiple commit message formats (conventional, simple, detailed)\n"
        "- Multi-language support (English and Japanese)\n"
        "- Categorizes changes by type (feat, fix, docs, test, chore, etc.)\n"
        "- Provides change summary and statistics\n"
        "\n"
        "Only the first maxFiles changed files are analyzed; statistics for larger\n"
        "change sets describe those files only."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "includeUnstaged": {
                "type": "boolean",
                "default": False,
                "description": "Include unstaged changes in the analysis",
            },
            "maxFiles": {
                "type": "number",
                "default": 10,
                "description": "Maximum number of files to analyze, a positive whole number (default: 10)",
            },
            "language": {
                "type": "string",
                "enum": ["ja", "en"],
                "default": "en",
                "description": "Language for the commit message (ja: Japanese, en: English)",
            },
            "format": {
                "type": "string",
                "enum": ["conventional", "simple", "detailed"],
                "default": "conventional",
                "description": "Commit message format style",
            },
        },
        "additionalProperties": False,
        "$schema": "http://json-schema.org/draft-07/schema#",
    },
}

TOOLS: List[Dict[str, Any]] = [GENERATE_COMMIT_MESSAGE_TOOL]

_PROPERTIES: Dict[str, Dict[str, Any]] = GENERATE_COMMIT_MESSAGE_TOOL["inputSchema"]["properties"]


class RequestValidationError(ValueError):
    """Raised when tool parameters do not match the input schema."""

    pass


@dataclass(frozen=True)
class CommitMessageRequest:
    """Validated parameters of a ``generate_commit_message`` call."""

    include_unstaged: bool = _PROPERTIES["includeUnstaged"]["default"]
    max_files: int = _PROPERTIES["maxFiles"]["default"]
    language: str = _PROPERTIES["language"]["default"]
    format: str = _PROPERTIES["format"]["default"]


def tool_descriptors_json(indent: Optional[int] = 2) -> str:
    """Serialize :data:`TOOLS` for the host application."""
    return json.dumps(TOOLS, indent=indent, ensure_ascii=False)


def _check_value(key: str, value: Any) -> Any:
    spec = _PROPERTIES[key]
    expected = spec["type"]
    if expected == "boolean" and not isinstance(value, bool):
        raise RequestValidationError(f"'{key}' must be a boolean")
    if expected == "number" and (isinstance(value, bool) or not isinstance(value, (int, float))):
        raise RequestValidationError(f"'{key}' must be a number")
    if expected == "string" and not isinstance(value, str):
        raise RequestValidationError(f"'{key}' must be a string")
    if "enum" in spec and value not in spec["enum"]:
        allowed = ", ".join(spec["enum"])
        raise RequestValidationError(f"'{key}' must be one of: {allowed}")
    return value


def validate_params(params: Optional[Mapping[str, Any]] = None) -> CommitMessageRequest:
    """Validate host parameters and return a :class:`CommitMessageRequest`.

    Keys use the schema names (``includeUnstaged``, ``maxFiles``,
    ``language``, ``format``). Missing keys and ``None`` values take the
    schema defaults.

    Raises
    ------
    RequestValidationError
        On unknown keys, values of the wrong type, enum violations, or a
        ``maxFiles`` that is not a positive whole number.
    """
    params = dict(params or {})
    unknown = sorted(key for key in params if key not in _PROPERTIES)
    if unknown:
        raise RequestValidationError(f"Unknown parameters: {', '.join(unknown)}")

    values = {
        key: _check_value(key, value)
        for key, value in params.items()
        if value is not None
    }

    max_files = values.get("maxFiles", _PROPERTIES["maxFiles"]["default"])
    if (isinstance(max_files, float) and not max_files.is_integer()) or max_files < 1:
        raise RequestValidationError("'maxFiles' must be a positive whole number")

    request = CommitMessageRequest(
        include_unstaged=values.get("includeUnstaged", _PROPERTIES["includeUnstaged"]["default"]),
        max_files=int(max_files),
        language=values.get("language", _PROPERTIES["language"]["default"]),
        format=values.get("format", _PROPERTIES["format"]["default"]),
    )
    logger.debug("Validated request: %s", request)
    return request
