"""
Custom exceptions for the application.
"""

from typing import Any, Iterable


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class LLMError(BaseAppError):
    """Exception raised for LLM-related errors."""

    pass


class FileRepositoryError(BaseAppError):
    """Exception raised for file repository errors."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class ToolError(BaseAppError):
    """Base exception for failures inside the tool execution layer."""

    pass


class ValidationError(ToolError):
    """Raised when a path, a line range or a change payload is rejected.

    Carries every collected message so callers can report all of them at once.
    """

    def __init__(self, errors: Iterable[str] | str, header: str | None = None):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: list[str] = list(errors)
        self.header = header
        super().__init__(self._render())

    def _render(self) -> str:
        body = "\n".join(self.errors)
        return f"{self.header}:\n{body}" if self.header else body


class NotFoundError(ToolError):
    """Raised when a target file or a backup file does not exist."""

    pass


class PartialApplicationError(ToolError):
    """Raised when some changes of a patch could not be spliced."""

    def __init__(self, failed_changes: list[Any]):
        self.failed_changes = list(failed_changes)
        super().__init__(
            f"{len(self.failed_changes)} changes could not be applied"
        )


class ParseError(ToolError):
    """Raised when tool-call arguments cannot be decoded."""

    pass
