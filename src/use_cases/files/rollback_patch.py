"""
Use case for restoring a file from a patch backup.
"""

import logging
from typing import Optional

from src.entities.Patch import RollbackResult
from src.exceptions import NotFoundError, ValidationError
from src.ports.files.backup_store_port import BackupStorePort
from src.utils.log import log_success
from src.utils.workspace import PathValidator


class RollbackPatchUseCase:
    """Use case for restoring a file from a backup, then deleting the backup."""

    def __init__(
        self,
        backup_store: BackupStorePort,
        path_validator: PathValidator,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            backup_store: Store that owns the backup files
            path_validator: Validator applied to the file being restored
            logger: Logger instance to use for logging
        """
        self._backup_store = backup_store
        self._path_validator = path_validator
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, backup_path: str, original_path: str) -> RollbackResult:
        """
        Copy the backup over the original and delete the backup.

        A backup can be rolled back at most once.

        Args:
            backup_path: Backup path returned by a previous patch
            original_path: File to restore

        Returns:
            RollbackResult describing the outcome
        """
        self._logger.info(f"Rolling back {original_path} from {backup_path}")
        try:
            validation = self._path_validator.validate(original_path)
            if not validation.valid:
                raise ValidationError(f"Invalid path: {validation.error}")
            if not self._backup_store.contains(backup_path):
                raise ValidationError(
                    f"Backup path is outside the backup directory: {backup_path}"
                )

            target = self._path_validator.resolve(original_path)
            self._backup_store.restore(backup_path, target)
            self._backup_store.discard(backup_path)
        except NotFoundError as e:
            self._logger.warning(str(e))
            return RollbackResult(success=False, message=str(e))
        except ValidationError as e:
            self._logger.warning(f"Rollback rejected: {e}")
            return RollbackResult(success=False, message=str(e))
        except OSError as e:
            self._logger.error(f"Error rolling back {original_path}: {e}")
            return RollbackResult(success=False, message=f"Rollback failed: {e}")

        log_success(self._logger, f"File rolled back successfully: {original_path}")
        return RollbackResult(
            success=True,
            message=f"Successfully rolled back {original_path} from backup",
        )
