"""
Tests for the LocalBackupStore.
"""

import os

import pytest

from src.adapters.files.local_backup_store import LocalBackupStore
from src.exceptions import NotFoundError


class TestLocalBackupStore:
    """Test cases for the LocalBackupStore."""

    def test_backup_dir_created_lazily(self, backup_dir, mock_logger):
        """Constructing the store does not create the directory."""
        LocalBackupStore(backup_dir, mock_logger)

        assert not os.path.exists(backup_dir)

    def test_create_backup_copies_bytes(self, workspace, backup_store, backup_dir):
        """The backup is a byte-identical copy named after the file."""
        source = os.path.join(workspace, "src", "app.py")

        backup_path = backup_store.create_backup(source)

        assert os.path.dirname(backup_path) == backup_dir
        assert os.path.basename(backup_path).startswith("app.py.backup-")
        with open(source, "rb") as a, open(backup_path, "rb") as b:
            assert a.read() == b.read()

    def test_backup_names_are_unique(self, workspace, backup_store):
        """Two backups of the same file never collide."""
        source = os.path.join(workspace, "src", "app.py")

        first = backup_store.create_backup(source)
        second = backup_store.create_backup(source)

        assert first != second
        assert os.path.isfile(first) and os.path.isfile(second)

    def test_create_backup_missing_file(self, workspace, backup_store):
        """Backing up a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError, match="File does not exist"):
            backup_store.create_backup(os.path.join(workspace, "nope.txt"))

    def test_restore_round_trip(self, workspace, backup_store):
        """create_backup then restore reproduces the original bytes."""
        source = os.path.join(workspace, "crlf.txt")
        original = b"one\r\ntwo\r\n\xc3\xa9t\xc3\xa9\r\n"
        with open(source, "wb") as f:
            f.write(original)

        backup_path = backup_store.create_backup(source)
        with open(source, "wb") as f:
            f.write(b"clobbered")
        assert backup_store.restore(backup_path, source) is True

        with open(source, "rb") as f:
            assert f.read() == original
        # restore keeps the backup
        assert os.path.isfile(backup_path)

    def test_restore_missing_backup(self, workspace, backup_store, backup_dir):
        """Restoring from a missing backup raises NotFoundError."""
        with pytest.raises(NotFoundError, match="Backup file not found"):
            backup_store.restore(
                os.path.join(backup_dir, "gone.backup-x"),
                os.path.join(workspace, "README.md"),
            )

    def test_discard_removes_backup(self, workspace, backup_store):
        """discard deletes the backup file."""
        backup_path = backup_store.create_backup(os.path.join(workspace, "README.md"))

        backup_store.discard(backup_path)

        assert not os.path.exists(backup_path)
        with pytest.raises(NotFoundError):
            backup_store.discard(backup_path)

    def test_contains(self, backup_store, backup_dir, workspace):
        """Only paths strictly inside the backup directory are contained."""
        assert backup_store.contains(os.path.join(backup_dir, "a.backup-1")) is True
        assert backup_store.contains(backup_dir) is False
        assert backup_store.contains(os.path.join(workspace, "README.md")) is False
        assert (
            backup_store.contains(os.path.join(backup_dir, "..", "escape.txt"))
            is False
        )
