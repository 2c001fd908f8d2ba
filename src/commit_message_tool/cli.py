"""
Command line interface for commit_message_tool.

This module defines the ``main`` function used as the entry point of the
``suggest-commit`` command. It loads the user configuration, merges it
with the command line options, runs the ``generate_commit_message`` tool
against the chosen working directory and prints the result.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click

from commit_message_tool import __version__
from commit_message_tool.config.loader import ConfigError, load_config
from commit_message_tool.schema import tool_descriptors_json
from commit_message_tool.tool import generate_commit_message_tool
from commit_message_tool.vcs.git_client import GitClient

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, enable_package_logging() turns propagation back on.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_CONFIG_ERROR = 5


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


PACKAGE_LOGGER_PREFIX = "commit_message_tool"


def enable_package_logging() -> None:
    """Let the package loggers propagate to the handlers set up by the CLI."""
    for name, pkg_logger in list(logging.root.manager.loggerDict.items()):
        if name.split(".")[0] == PACKAGE_LOGGER_PREFIX and isinstance(pkg_logger, logging.Logger):
            pkg_logger.propagate = True


def build_params(
    config: Dict[str, Any],
    include_unstaged: bool,
    max_files: Optional[int],
    language: Optional[str],
    format: Optional[str],
) -> Dict[str, Any]:
    """Merge configuration defaults with the options given on the command line."""
    params = dict(config)
    if include_unstaged:
        params["includeUnstaged"] = True
    overrides = {"maxFiles": max_files, "language": language, "format": format}
    params.update({key: value for key, value in overrides.items() if value is not None})
    return params


@click.command()
@click.option(
    "--repo",
    "repo",
    type=click.Path(file_okay=False, path_type=Path),
    help="Working directory to inspect (defaults to the current directory).",
)
@click.option("--include-unstaged", is_flag=True, help="Analyze all changes against HEAD, not only staged ones.")
@click.option("--max-files", type=click.IntRange(min=1), help="Maximum number of files to analyze.")
@click.option("--language", type=click.Choice(["ja", "en"]), help="Language of the commit message.")
@click.option(
    "--format",
    "format",
    type=click.Choice(["conventional", "simple", "detailed"]),
    help="Commit message format style.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result envelope as JSON.")
@click.option("--print-schema", is_flag=True, help="Print the tool descriptors as JSON and exit.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="suggest-commit")
def main(
    repo: Optional[Path],
    include_unstaged: bool,
    max_files: Optional[int],
    language: Optional[str],
    format: Optional[str],
    as_json: bool,
    print_schema: bool,
    verbose: bool,
) -> None:
    """Suggest a commit message for the changes in a Git repository.

    By default only staged changes are analyzed.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    enable_package_logging()

    ctx = click.get_current_context(silent=True)

    try:
        if print_schema:
            click.echo(tool_descriptors_json())
            raise click.exceptions.Exit(EXIT_SUCCESS)

        try:
            config = load_config()
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        params = build_params(config, include_unstaged, max_files, language, format)
        working_dir = repo if repo is not None else Path.cwd()
        logger.debug("Working directory: %s, parameters: %s", working_dir, params)

        if not as_json and working_dir.is_dir():
            repo_root = GitClient.find_repo_root(working_dir)
            if repo_root is not None:
                print_info(f"Git repository: {repo_root}")

        result = generate_commit_message_tool(working_dir, params)

        if as_json:
            click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        elif result.is_error:
            print_error(result.text)
        else:
            click.echo(result.text)

        raise click.exceptions.Exit(EXIT_GENERIC_ERROR if result.is_error else EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
