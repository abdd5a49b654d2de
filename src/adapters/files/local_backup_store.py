"""
Local file system adapter keeping pre-patch snapshots of files.
"""

import logging
import os
import shutil
from datetime import datetime, timezone

from typing_extensions import override

from src.exceptions import NotFoundError
from src.ports.files.backup_store_port import BackupStorePort
from src.utils.workspace import is_within


def _timestamp() -> str:
    """ISO-8601 UTC timestamp made safe for file names."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="microseconds")
    return stamp.replace("+00:00", "Z").replace(":", "-").replace(".", "-")


class LocalBackupStore(BackupStorePort):
    """Backups stored as `<basename>.backup-<timestamp>` in a single directory."""

    def __init__(self, backup_dir: str, logger: logging.Logger | None = None):
        """
        Initialize the store. The directory is only created on first backup.

        Args:
            backup_dir: Directory receiving the backups
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self.backup_dir: str = os.path.abspath(os.path.expanduser(backup_dir))
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

    def _ensure_backup_dir(self) -> None:
        if not os.path.isdir(self.backup_dir):
            os.makedirs(self.backup_dir, exist_ok=True)
            self._logger.debug(f"Created backup directory: {self.backup_dir}")

    def _unique_backup_path(self, file_path: str) -> str:
        base = os.path.join(
            self.backup_dir, f"{os.path.basename(file_path)}.backup-{_timestamp()}"
        )
        candidate = base
        counter = 1
        while os.path.exists(candidate):
            candidate = f"{base}-{counter}"
            counter += 1
        return candidate

    @override
    def create_backup(self, file_path: str) -> str:
        if not os.path.isfile(file_path):
            raise NotFoundError(f"File does not exist: {file_path}")

        self._ensure_backup_dir()
        backup_path = self._unique_backup_path(file_path)
        shutil.copyfile(file_path, backup_path)
        # the backup must be on disk before the original is touched
        with open(backup_path, "rb") as f:
            os.fsync(f.fileno())

        self._logger.info(f"Backup created: {backup_path}")
        return backup_path

    @override
    def restore(self, backup_path: str, original_path: str) -> bool:
        if not os.path.isfile(backup_path):
            raise NotFoundError(f"Backup file not found: {backup_path}")

        shutil.copyfile(backup_path, original_path)
        self._logger.info(f"Restored {original_path} from {backup_path}")
        return True

    @override
    def discard(self, backup_path: str) -> None:
        if not os.path.isfile(backup_path):
            raise NotFoundError(f"Backup file not found: {backup_path}")
        os.remove(backup_path)
        self._logger.debug(f"Backup discarded: {backup_path}")

    @override
    def contains(self, path: str) -> bool:
        candidate = os.path.abspath(os.path.expanduser(path))
        return candidate != self.backup_dir and is_within(self.backup_dir, candidate)
