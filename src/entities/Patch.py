"""
Patch domain entities: line-based changes, requests and results.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

PatchAction = Literal["replace", "insert", "delete"]
PATCH_ACTIONS: tuple[str, ...] = ("replace", "insert", "delete")


@dataclass
class PatchChange:
    """
    A single line-range edit. Line numbers are 1-based.

    `line_end` is only meaningful for replace/delete and defaults to
    `line_start` when omitted.
    """

    action: PatchAction
    line_start: int
    line_end: Optional[int] = None
    content: Optional[str] = None

    @property
    def end_line(self) -> int:
        return self.line_end or self.line_start

    def content_lines(self) -> list[str]:
        """Content split on line breaks, one entry per resulting file line."""
        return (self.content or "").split("\n")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.action, "lineStart": self.line_start}
        if self.line_end is not None:
            data["lineEnd"] = self.line_end
        if self.content is not None:
            data["content"] = self.content
        return data


@dataclass
class PatchRequest:
    file: str
    changes: list[PatchChange]


@dataclass
class PatchResult:
    success: bool
    message: str
    backup_path: Optional[str] = None
    applied_changes: int = 0
    failed_changes: list[PatchChange] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "appliedChanges": self.applied_changes,
            "failedChanges": [c.to_dict() for c in self.failed_changes],
        }
        if self.backup_path is not None:
            data["backupPath"] = self.backup_path
        return data


@dataclass
class RollbackResult:
    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}
