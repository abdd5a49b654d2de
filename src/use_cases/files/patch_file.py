"""
Use case for applying line-based patches to a file.
"""

import logging
import os
from typing import Optional

from src.entities.Patch import PATCH_ACTIONS, PatchChange, PatchRequest, PatchResult
from src.exceptions import NotFoundError, PartialApplicationError, ValidationError
from src.ports.files.backup_store_port import BackupStorePort
from src.utils.log import log_success
from src.utils.workspace import PathValidator


def validate_change(change: PatchChange, total_lines: int) -> Optional[str]:
    """
    Check one change against the file's line count before any edit.

    Returns:
        An error message, or None if the change is valid
    """
    if change.action not in PATCH_ACTIONS:
        return f"Invalid action: {change.action}. Must be one of {', '.join(PATCH_ACTIONS)}"

    if change.line_start < 1 or change.line_start > total_lines + 1:
        return (
            f"Invalid lineStart: {change.line_start}. "
            f"Must be between 1 and {total_lines + 1}"
        )

    if change.action in ("replace", "delete"):
        end = change.end_line
        if end < change.line_start:
            return (
                f"Invalid range: lineEnd ({end}) must be >= "
                f"lineStart ({change.line_start})"
            )
        if end > total_lines:
            return f"Invalid lineEnd: {end}. Must be <= {total_lines}"

    if change.action == "delete" and change.content:
        return "Delete operation should not have content"

    if change.action in ("replace", "insert") and not change.content:
        return f"{change.action} operation requires content"

    return None


def splice(lines: list[str], change: PatchChange) -> None:
    """
    Apply one change to the in-memory lines.

    Bounds are checked against the list as it is now, which may already have
    been shortened by previously applied changes.

    Raises:
        IndexError: If the change no longer fits the current lines
    """
    start = change.line_start - 1
    if change.action == "insert":
        if start < 0 or start > len(lines):
            raise IndexError(
                f"insert at line {change.line_start} is outside 1..{len(lines) + 1}"
            )
        lines[start:start] = change.content_lines()
        return

    end = change.end_line
    if start < 0 or end > len(lines) or end < change.line_start:
        raise IndexError(
            f"{change.action} of lines {change.line_start}-{end} is outside 1..{len(lines)}"
        )
    if change.action == "replace":
        lines[start:end] = change.content_lines()
    else:
        del lines[start:end]


class PatchFileUseCase:
    """Use case for applying an ordered set of line-range edits to one file."""

    def __init__(
        self,
        backup_store: BackupStorePort,
        path_validator: PathValidator,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            backup_store: Store used to snapshot the file before mutation
            path_validator: Validator applied to the target path
            logger: Logger instance to use for logging
        """
        self._backup_store = backup_store
        self._path_validator = path_validator
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, request: PatchRequest) -> PatchResult:
        """
        Apply a patch request.

        The file is mutated only after the path and every change are valid and
        a backup exists. Changes are applied from the highest lineStart down,
        so the line numbers of changes not yet applied never shift. If any
        change fails, the file is restored from the backup.

        Args:
            request: File path and ordered changes

        Returns:
            PatchResult describing the outcome; never raises for expected failures
        """
        self._logger.info(
            f"Patching file: {request.file} ({len(request.changes)} changes)"
        )
        try:
            full_path = self._resolve(request.file)
            lines = self._read_lines(full_path)
            self._validate_changes(request.changes, len(lines))
        except (ValidationError, NotFoundError) as e:
            self._logger.warning(f"Patch rejected for {request.file}: {e}")
            return PatchResult(
                success=False,
                message=str(e),
                applied_changes=0,
                failed_changes=list(request.changes),
            )
        except OSError as e:
            self._logger.error(f"Error reading {request.file}: {e}")
            return PatchResult(
                success=False,
                message=f"Patch operation failed: {e}",
                failed_changes=list(request.changes),
            )

        try:
            backup_path = self._backup_store.create_backup(full_path)
        except Exception as e:
            self._logger.error(f"Error creating backup for {request.file}: {e}")
            return PatchResult(
                success=False,
                message=f"Patch operation failed: could not create backup: {e}",
                failed_changes=list(request.changes),
            )

        try:
            self._apply_changes(lines, request.changes)
            self._write_lines(full_path, lines)
        except PartialApplicationError as e:
            restored = self._restore(backup_path, full_path)
            return PatchResult(
                success=False,
                message=(
                    f"Patch failed. {len(e.failed_changes)} changes could not be "
                    f"applied. {restored}"
                ),
                backup_path=backup_path,
                applied_changes=0,
                failed_changes=e.failed_changes,
            )
        except OSError as e:
            self._logger.error(f"Error writing {request.file}: {e}")
            restored = self._restore(backup_path, full_path)
            return PatchResult(
                success=False,
                message=f"Patch operation failed: {e}. {restored}",
                backup_path=backup_path,
                applied_changes=0,
                failed_changes=list(request.changes),
            )

        applied = len(request.changes)
        log_success(
            self._logger,
            f"File patched successfully: {request.file} ({applied} changes applied)",
        )
        return PatchResult(
            success=True,
            message=f"Successfully applied {applied} changes to {request.file}",
            backup_path=backup_path,
            applied_changes=applied,
            failed_changes=[],
        )

    def _restore(self, backup_path: str, full_path: str) -> str:
        """Copy the backup back and describe the outcome for the result message."""
        try:
            self._backup_store.restore(backup_path, full_path)
        except Exception as e:
            self._logger.error(f"Could not restore {full_path} from {backup_path}: {e}")
            return f"Restore from backup failed: {e}. Backup kept at: {backup_path}"
        return "File restored from backup."

    def _resolve(self, file: str) -> str:
        validation = self._path_validator.validate(file)
        if not validation.valid:
            raise ValidationError(f"Invalid path: {validation.error}")
        full_path = self._path_validator.resolve(file)
        if not os.path.exists(full_path):
            # nothing to protect, so no backup either
            raise NotFoundError(f"File does not exist: {file}")
        if not os.path.isfile(full_path):
            raise ValidationError(f"Path is not a file: {file}")
        return full_path

    def _read_lines(self, full_path: str) -> list[str]:
        try:
            with open(full_path, "r", encoding="utf-8", newline="") as f:
                content = f.read()
        except UnicodeDecodeError:
            raise ValidationError("File is not valid UTF-8 text")
        # an empty file is one empty line, so inserting at line 1 is legal
        return content.split("\n")

    def _validate_changes(self, changes: list[PatchChange], total_lines: int) -> None:
        errors: list[str] = []
        for i, change in enumerate(changes, start=1):
            error = validate_change(change, total_lines)
            if error:
                errors.append(f"Change {i}: {error}")
        if errors:
            raise ValidationError(errors, header="Validation failed")

    def _apply_changes(self, lines: list[str], changes: list[PatchChange]) -> None:
        failed: list[PatchChange] = []
        # descending lineStart; sorted() is stable, so equal starts keep request order
        for change in sorted(changes, key=lambda c: c.line_start, reverse=True):
            try:
                splice(lines, change)
            except IndexError as e:
                self._logger.warning(f"Change could not be applied: {e}")
                failed.append(change)
        if failed:
            raise PartialApplicationError(failed)

    def _write_lines(self, full_path: str, lines: list[str]) -> None:
        with open(full_path, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(lines))
