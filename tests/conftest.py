import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_user_config():
    """Point the user configuration directory at an empty temporary directory.

    Tests expect no user-level configuration to exist. Individual tests
    that need one patch ``_get_config_directory`` themselves.
    """
    with tempfile.TemporaryDirectory(prefix="commit_message_tool_home_") as tmp:
        with patch(
            "commit_message_tool.config.loader._get_config_directory",
            return_value=Path(tmp),
        ):
            yield
