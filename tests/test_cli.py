import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

import commit_message_tool.cli as cli
from commit_message_tool.config.loader import ConfigError
from commit_message_tool.tool import CommitMessageResult


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self.addCleanup(TestVerboseLogging.restore_logging)
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_print_schema(self) -> None:
        with patch.object(cli, "load_config") as mock_load:
            result = self.runner.invoke(cli.main, ["--print-schema"])
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(json.loads(result.stdout)[0]["name"], "generate_commit_message")
        mock_load.assert_not_called()

    def test_success_merges_config_and_options(self) -> None:
        ok = CommitMessageResult(is_error=False, text="**Suggested Commit Message:**\nfeat: add x")
        with patch.object(cli, "load_config", return_value={"language": "ja", "maxFiles": 3}):
            with patch.object(cli, "generate_commit_message_tool", return_value=ok) as mock_tool:
                result = self.runner.invoke(
                    cli.main,
                    ["--repo", self.repo, "--format", "detailed", "--max-files", "7", "--include-unstaged"],
                )
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertIn("feat: add x", result.output)
        working_dir, params = mock_tool.call_args[0]
        self.assertEqual(working_dir, Path(self.repo))
        self.assertEqual(
            params,
            {"language": "ja", "maxFiles": 7, "format": "detailed", "includeUnstaged": True},
        )

    def test_defaults_to_current_directory(self) -> None:
        ok = CommitMessageResult(is_error=False, text="No changes to commit. Working directory is clean.")
        with patch.object(cli, "load_config", return_value={}):
            with patch.object(cli, "generate_commit_message_tool", return_value=ok) as mock_tool:
                with self.runner.isolated_filesystem():
                    result = self.runner.invoke(cli.main, [])
                    cwd = Path.cwd()
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(mock_tool.call_args[0], (cwd, {}))

    def test_error_result_exit_code(self) -> None:
        failed = CommitMessageResult(is_error=True, text="Current directory is not a git repository.")
        with patch.object(cli, "load_config", return_value={}):
            with patch.object(cli, "generate_commit_message_tool", return_value=failed):
                result = self.runner.invoke(cli.main, ["--repo", self.repo])
        self.assertEqual(result.exit_code, cli.EXIT_GENERIC_ERROR)
        self.assertIn("not a git repository", result.output)

    def test_json_output(self) -> None:
        ok = CommitMessageResult(is_error=False, text="READMEを更新")
        with patch.object(cli, "load_config", return_value={}):
            with patch.object(cli, "generate_commit_message_tool", return_value=ok):
                result = self.runner.invoke(cli.main, ["--repo", self.repo, "--json"])
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(
            json.loads(result.stdout),
            {"content": [{"type": "text", "text": "READMEを更新"}], "isError": False},
        )

    def test_config_error(self) -> None:
        with patch.object(cli, "load_config", side_effect=ConfigError("bad config")):
            result = self.runner.invoke(cli.main, ["--repo", self.repo])
        self.assertEqual(result.exit_code, cli.EXIT_CONFIG_ERROR)
        self.assertIn("Configuration error", result.output)

    def test_invalid_option_value(self) -> None:
        result = self.runner.invoke(cli.main, ["--language", "de"])
        self.assertEqual(result.exit_code, cli.EXIT_INVALID_USAGE)

    def test_unexpected_error(self) -> None:
        with patch.object(cli, "load_config", return_value={}):
            with patch.object(cli, "generate_commit_message_tool", side_effect=RuntimeError("boom")):
                result = self.runner.invoke(cli.main, ["--repo", self.repo])
        self.assertEqual(result.exit_code, cli.EXIT_GENERIC_ERROR)
        self.assertIn("Unexpected error: boom", result.output)


class TestVerboseLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(self.restore_logging)

    @staticmethod
    def restore_logging() -> None:
        for handler in list(logging.root.handlers):
            logging.root.removeHandler(handler)
        for name, pkg_logger in list(logging.root.manager.loggerDict.items()):
            if name.startswith("commit_message_tool") and isinstance(pkg_logger, logging.Logger):
                pkg_logger.propagate = False

    def invoke(self, *extra):
        with patch.object(cli, "load_config", return_value={}):
            return self.runner.invoke(cli.main, ["--repo", self._tmp.name, *extra])

    def test_verbose_shows_package_debug_records(self) -> None:
        result = self.invoke("--verbose")
        debug_lines = [line for line in result.output.splitlines() if line.startswith("DEBUG:")]
        self.assertTrue(debug_lines)
        self.assertTrue(any("Validated request" in line for line in debug_lines))

    def test_debug_records_hidden_without_verbose(self) -> None:
        result = self.invoke()
        self.assertFalse([line for line in result.output.splitlines() if line.startswith("DEBUG:")])

    def test_enable_package_logging(self) -> None:
        from commit_message_tool.analysis import change_analyzer

        change_analyzer.logger.propagate = False
        cli.enable_package_logging()
        self.assertTrue(change_analyzer.logger.propagate)


class TestBuildParams(unittest.TestCase):
    def test_options_override_config(self) -> None:
        config = {"language": "ja", "format": "simple", "includeUnstaged": True}
        self.assertEqual(
            cli.build_params(config, False, None, "en", None),
            {"language": "en", "format": "simple", "includeUnstaged": True},
        )

    def test_does_not_mutate_config(self) -> None:
        config = {"maxFiles": 4}
        cli.build_params(config, True, 9, None, None)
        self.assertEqual(config, {"maxFiles": 4})


if __name__ == "__main__":
    unittest.main()
