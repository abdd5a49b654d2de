"""
Pydantic models decoding raw tool-call arguments into typed requests.
"""

from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from src.entities.CreateItem import CreateItemRequest
from src.entities.Patch import PatchChange, PatchRequest
from src.exceptions import ParseError


class ToolArguments(BaseModel):
    """Base model: accepts both the camelCase aliases and the field names."""

    model_config = ConfigDict(populate_by_name=True)


class SearchCodebaseArgs(ToolArguments):
    query: str = Field(..., description="Search term to find in code content")


class CodeContextArgs(ToolArguments):
    file: str = Field(..., description="Path to the file")
    line: int = Field(..., description="Line number to get context around")


class PatchChangeArgs(ToolArguments):
    """Schema for a single patch change."""

    action: Literal["replace", "insert", "delete"] = Field(
        ..., description="Operation to perform"
    )
    line_start: int = Field(..., alias="lineStart", description="1-based start line")
    line_end: Optional[int] = Field(
        None, alias="lineEnd", description="1-based end line, defaults to lineStart"
    )
    content: Optional[str] = Field(None, description="New text for replace/insert")

    def to_entity(self) -> PatchChange:
        return PatchChange(
            action=self.action,
            line_start=self.line_start,
            line_end=self.line_end,
            content=self.content,
        )


class PatchFileArgs(ToolArguments):
    file: str = Field(..., description="Path to the file to patch")
    changes: List[PatchChangeArgs] = Field(
        ..., min_length=1, description="Patch operations to apply"
    )

    def to_request(self) -> PatchRequest:
        return PatchRequest(
            file=self.file, changes=[c.to_entity() for c in self.changes]
        )


class RollbackPatchArgs(ToolArguments):
    backup_path: str = Field(..., alias="backupPath", description="Backup file path")
    original_path: str = Field(
        ..., alias="originalPath", description="File to restore"
    )


class DirectoryStructureArgs(ToolArguments):
    path: Optional[str] = Field(None, description="Directory to analyze")
    max_depth: Optional[int] = Field(
        None, alias="maxDepth", description="Maximum depth to traverse"
    )


class CreateItemArgs(ToolArguments):
    """Schema for one item to create."""

    path: str = Field(..., description="Path relative to the project root")
    # free-form so an unknown kind reaches the create use case and is reported there
    type: str = Field(..., description="'file' or 'directory'")
    content: Optional[str] = Field(None, description="File content")
    overwrite: bool = Field(False, description="Replace an existing item")

    def to_request(self) -> CreateItemRequest:
        return CreateItemRequest(
            path=self.path,
            type=self.type,
            content=self.content,
            overwrite=self.overwrite,
        )


class CreateMultipleItemsArgs(ToolArguments):
    items: List[CreateItemArgs] = Field(..., description="Items to create")

    def to_requests(self) -> List[CreateItemRequest]:
        return [item.to_request() for item in self.items]


class CreateProjectStructureArgs(ToolArguments):
    structure: Dict[str, str] = Field(..., description="Mapping of path to kind")


class PathsArgs(ToolArguments):
    paths: List[str] = Field(..., description="Paths to create")


TOOL_ARGUMENTS: Dict[str, Type[ToolArguments]] = {
    "search_codebase": SearchCodebaseArgs,
    "code_context": CodeContextArgs,
    "patch_file": PatchFileArgs,
    "rollback_patch": RollbackPatchArgs,
    "directory_structure": DirectoryStructureArgs,
    "create_item": CreateItemArgs,
    "create_multiple_items": CreateMultipleItemsArgs,
    "create_project_structure": CreateProjectStructureArgs,
    "create_directory_scaffold": PathsArgs,
    "create_empty_files": PathsArgs,
}


def _describe(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def decode_arguments(name: str, arguments: Any) -> ToolArguments:
    """
    Decode parsed tool-call arguments into the model for `name`.

    Args:
        name: Tool name
        arguments: Parsed JSON value (normally a dict)

    Returns:
        The validated arguments model

    Raises:
        ValueError: If no tool has this name
        ParseError: If the arguments do not match the tool's schema or nest
            too deeply to validate
    """
    model = TOOL_ARGUMENTS.get(name)
    if model is None:
        raise ValueError(f"Unknown tool: {name}")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ParseError(
            f"Arguments for {name} must be a JSON object, got {type(arguments).__name__}"
        )
    try:
        return model.model_validate(arguments)
    except PydanticValidationError as e:
        raise ParseError("; ".join(_describe(err) for err in e.errors()))
    except RecursionError:
        raise ParseError(f"Arguments for {name} are nested too deeply")
