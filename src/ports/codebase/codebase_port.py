"""
Codebase port interface: read-only views of the project used by the model.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CodebasePort(ABC):
    """Port interface for searching and reading the codebase."""

    @abstractmethod
    def search(self, query: str) -> str:
        """
        Search file contents for a text.

        Args:
            query: Text to look for

        Returns:
            Textual report of matches with file and line number

        Raises:
            FileRepositoryError: If the search fails
        """
        pass

    @abstractmethod
    def context(self, file: str, line: int) -> str:
        """
        Show the lines surrounding a line of a file.

        Args:
            file: Path of the file
            line: 1-based line number

        Returns:
            Textual report of the surrounding lines

        Raises:
            FileRepositoryError: If the file cannot be read or the line is out of range
        """
        pass

    @abstractmethod
    def list_tree(self, path: Optional[str] = None, max_depth: Optional[int] = None) -> str:
        """
        Render a directory tree that respects ignore rules.

        Args:
            path: Directory to render (default: workspace root)
            max_depth: Maximum depth to traverse (default: 3)

        Returns:
            Textual tree

        Raises:
            FileRepositoryError: If the directory is invalid
        """
        pass
