# tests/conftest.py
import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from config.config_models import AppSettings


@pytest.fixture
def app_settings():
    """Fixture to provide a basic AppSettings object."""
    return AppSettings(
        branch="main",
        gh_command="gh",
        python_command="python3",
        log_level="INFO",
        use_color=False,
    )


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def completed():
    """Factory for subprocess.CompletedProcess results."""

    def _completed(returncode=0, stdout="", stderr="", args=None):
        return subprocess.CompletedProcess(
            args=args or [], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _completed


@pytest.fixture
def repo_root(tmp_path):
    """An empty directory standing in for a cloned repository."""
    root = tmp_path / "clone"
    root.mkdir()
    return root
