"""
Use case for creating files and directories in the workspace.
"""

import logging
import os
import shutil
from typing import Optional

from src.entities.CreateItem import CreateItemRequest, CreateItemResult
from src.utils.log import log_success
from src.utils.workspace import PathValidator


class CreateItemsUseCase:
    """Use case for creating files and directories, single or in batches."""

    def __init__(
        self,
        path_validator: PathValidator,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            path_validator: Validator applied to every requested path
            logger: Logger instance to use for logging
        """
        self._path_validator = path_validator
        self._logger = logger or logging.getLogger(__name__)

    def create_item(self, request: CreateItemRequest) -> CreateItemResult:
        """
        Create one file or directory.

        Parent directories are created as needed. An existing item is only
        replaced when `overwrite` is set; a directory replaced by a file is
        removed recursively.

        Args:
            request: Path, type, optional content and overwrite flag

        Returns:
            CreateItemResult describing the outcome
        """
        item_path = request.path
        content = request.content or ""

        validation = self._path_validator.validate(item_path)
        if not validation.valid:
            return CreateItemResult(
                success=False, message=f"Invalid path: {validation.error}"
            )

        try:
            full_path = self._path_validator.resolve(item_path)
            exists = os.path.lexists(full_path)

            if exists and not request.overwrite:
                existing_type = "directory" if os.path.isdir(full_path) else "file"
                return CreateItemResult(
                    success=False,
                    message=(
                        f"{existing_type} already exists at: {full_path}\n"
                        f"CWD: {self._path_validator.root}\n"
                        f"Requested: {item_path}\n"
                        "Use overwrite option to replace."
                    ),
                )

            if request.type == "directory":
                if exists and not os.path.isdir(full_path):
                    os.remove(full_path)
                os.makedirs(full_path, exist_ok=True)

                log_success(self._logger, f"Directory created: {item_path}")
                return CreateItemResult(
                    success=True,
                    message=f"Directory created successfully: {item_path} at {full_path}",
                    created=full_path,
                    type="directory",
                )

            if request.type == "file":
                os.makedirs(os.path.dirname(full_path), exist_ok=True)
                if exists and os.path.isdir(full_path):
                    shutil.rmtree(full_path)

                with open(full_path, "w", encoding="utf-8") as f:
                    f.write(content)

                size = f" ({len(content)} characters)" if content else " (empty)"
                log_success(self._logger, f"File created: {item_path}")
                return CreateItemResult(
                    success=True,
                    message=f"File created successfully: {item_path} at {full_path}{size}",
                    created=full_path,
                    type="file",
                )

            return CreateItemResult(
                success=False,
                message=f"Invalid type: {request.type}. Must be 'file' or 'directory'.",
            )
        except OSError as e:
            self._logger.error(f"Error creating {request.type} {item_path}: {e}")
            return CreateItemResult(
                success=False, message=f"Failed to create {request.type}: {e}"
            )

    def create_multiple_items(
        self, requests: list[CreateItemRequest]
    ) -> list[CreateItemResult]:
        """Create every item in order; a failure does not stop the batch."""
        results = [self.create_item(request) for request in requests]
        created = sum(1 for r in results if r.success)
        self._logger.info(f"Created {created}/{len(results)} items")
        return results

    def create_project_structure(
        self, structure: dict[str, str]
    ) -> list[CreateItemResult]:
        """
        Create directories and empty files from a path -> kind mapping.

        Directories are created before files, each group in path order.
        """
        requests = [
            CreateItemRequest(
                path=path, type=kind, content="" if kind == "file" else None
            )
            for path, kind in structure.items()
        ]
        requests.sort(key=lambda r: (r.type != "directory", r.path))
        return self.create_multiple_items(requests)

    def create_directory_scaffold(self, paths: list[str]) -> list[CreateItemResult]:
        return self.create_multiple_items(
            [CreateItemRequest(path=p, type="directory") for p in paths]
        )

    def create_empty_files(self, paths: list[str]) -> list[CreateItemResult]:
        return self.create_multiple_items(
            [CreateItemRequest(path=p, type="file", content="") for p in paths]
        )
