"""
Create-item domain entities.
"""

from dataclasses import dataclass
from typing import Any, Literal, Optional

ItemType = Literal["file", "directory"]


@dataclass
class CreateItemRequest:
    path: str
    type: str
    content: Optional[str] = None
    overwrite: bool = False


@dataclass
class CreateItemResult:
    success: bool
    message: str
    created: Optional[str] = None
    type: Optional[ItemType] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.created is not None:
            data["created"] = self.created
        if self.type is not None:
            data["type"] = self.type
        return data
