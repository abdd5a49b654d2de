from __future__ import annotations

import os
from typing import NamedTuple, Optional

"""Workspace root utilities to constrain file access.

Every path coming from the model goes through PathValidator before any
filesystem call. Validation is purely lexical: nothing is stat'ed or resolved
through symlinks.
"""

UNSAFE_FILENAME_CHARS = frozenset('<>:"|?*')


class PathValidation(NamedTuple):
    valid: bool
    error: Optional[str] = None


def is_within(root: str, abs_path: str) -> bool:
    """Return True if abs_path equals root or is a descendant of it."""
    try:
        common = os.path.commonpath([root, abs_path])
    except ValueError:
        # different drives, or mixing absolute and relative paths
        return False
    return common == root


class PathValidator:
    """Rejects unsafe target paths: traversal, root escapes, bad filenames.

    Args:
        root: Workspace root. When None, the current working directory at call
            time is used, so a `/cwd` change in the chat loop is honoured.
    """

    def __init__(self, root: Optional[str] = None) -> None:
        self._root = os.path.abspath(root) if root else None

    @property
    def root(self) -> str:
        return self._root or os.path.abspath(os.getcwd())

    def validate(
        self, target_path: str, allow_root: bool = False
    ) -> PathValidation:
        """Check target_path before any filesystem call.

        Args:
            target_path: Path as given by the model
            allow_root: Accept a path naming the root itself. Only read-only
                callers such as the directory tree pass True.
        """
        if not isinstance(target_path, str) or not target_path.strip():
            return PathValidation(False, "Path must be a non-empty string")

        normalized = os.path.normpath(target_path)
        parts = normalized.replace("\\", "/").split("/")
        if ".." in parts:
            return PathValidation(
                False, 'Path cannot contain ".." (directory traversal)'
            )

        if os.path.isabs(normalized):
            if not is_within(self.root, os.path.abspath(normalized)):
                return PathValidation(
                    False, "Cannot create files outside current project directory"
                )

        if not allow_root and self.resolve(normalized) == self.root:
            return PathValidation(
                False, "Path cannot refer to the project root directory"
            )

        if UNSAFE_FILENAME_CHARS.intersection(os.path.basename(normalized)):
            return PathValidation(False, "Filename contains invalid characters")

        return PathValidation(True)

    def resolve(self, target_path: str) -> str:
        """Absolute form of target_path, relative paths anchored at the root."""
        return os.path.abspath(os.path.join(self.root, target_path))
