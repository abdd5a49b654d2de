"""
Backup store port interface defining the contract for file snapshots.
"""

from abc import ABC, abstractmethod


class BackupStorePort(ABC):
    """Port interface for byte-identical snapshots of single files."""

    @abstractmethod
    def create_backup(self, file_path: str) -> str:
        """
        Copy a file into the backup directory.

        Args:
            file_path: Absolute path of the file to snapshot

        Returns:
            Absolute path of the backup file, unique per call

        Raises:
            NotFoundError: If the file does not exist
        """
        pass

    @abstractmethod
    def restore(self, backup_path: str, original_path: str) -> bool:
        """
        Overwrite the original file with the backup, byte for byte.

        Args:
            backup_path: Path of a backup returned by create_backup
            original_path: File to overwrite

        Returns:
            True once the original has been overwritten

        Raises:
            NotFoundError: If the backup does not exist
        """
        pass

    @abstractmethod
    def discard(self, backup_path: str) -> None:
        """
        Delete a backup file.

        Args:
            backup_path: Path of the backup to delete
        """
        pass

    @abstractmethod
    def contains(self, path: str) -> bool:
        """
        Tell whether a path lives inside the backup directory.

        Args:
            path: Any path

        Returns:
            True if the path is inside the backup directory
        """
        pass
