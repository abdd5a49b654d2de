"""
Pytest configuration and shared fixtures.
"""

import pytest
from unittest.mock import MagicMock

from src.adapters.files.local_backup_store import LocalBackupStore
from src.config.settings import Settings
from src.container import DependencyContainer
from src.utils.workspace import PathValidator


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """
    Create a temporary project directory and make it the working directory.

    Returns:
        Absolute path to the project directory
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text(
        "def main():\n    print('Hello, world!')\n", encoding="utf-8"
    )
    (root / "README.md").write_text("# Demo\n\nA demo project.\n", encoding="utf-8")
    monkeypatch.chdir(root)
    return str(root)


@pytest.fixture
def backup_dir(tmp_path):
    """
    Path of a backup directory that does not exist yet.

    Returns:
        Absolute path under the pytest temporary directory
    """
    return str(tmp_path / "backups")


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def path_validator(workspace):
    return PathValidator(workspace)


@pytest.fixture
def backup_store(backup_dir, mock_logger):
    return LocalBackupStore(backup_dir, mock_logger)


@pytest.fixture
def test_settings(workspace, backup_dir):
    """
    Settings pointing at the temporary workspace and backup directory.
    """
    settings = Settings()
    settings.workspace_root = workspace
    settings.backup_dir = backup_dir
    settings.openai_api_key = "test-key"
    settings.debug = False
    return settings


@pytest.fixture
def dependency_container(test_settings, mock_logger):
    """
    Create a dependency container wired to temporary directories.

    Returns:
        DependencyContainer instance with mocked logger
    """
    container = DependencyContainer(test_settings)
    # Replace the logger with our mock
    container._logger = mock_logger
    return container

