#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_message_tool CLI.

Running ``python suggest_commit.py`` is equivalent to running the
``suggest-commit`` console script installed via ``pyproject.toml``.
"""

from commit_message_tool.cli import main


if __name__ == "__main__":
    main(prog_name="suggest-commit")
