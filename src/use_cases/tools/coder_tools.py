"""
Tools for reading, patching and creating files in the workspace, routed to the file use cases.
"""

import json
import logging
from typing import Any, Callable, Optional

from src.entities.Patch import PatchRequest, PatchResult
from src.entities.ToolCall import ToolCall
from src.exceptions import ParseError
from src.ports.codebase.codebase_port import CodebasePort
from src.ports.llm.tools_port import ToolsHandlerPort, ToolSpec
from src.use_cases.files.create_items import CreateItemsUseCase
from src.use_cases.files.patch_file import PatchFileUseCase
from src.use_cases.files.rollback_patch import RollbackPatchUseCase
from src.use_cases.tools.registry import get_tool_definitions
from src.use_cases.tools.schemas import (
    CodeContextArgs,
    CreateItemArgs,
    CreateMultipleItemsArgs,
    CreateProjectStructureArgs,
    DirectoryStructureArgs,
    PatchFileArgs,
    PathsArgs,
    RollbackPatchArgs,
    SearchCodebaseArgs,
    decode_arguments,
)


def format_patch_result(request: PatchRequest, result: PatchResult) -> str:
    """Render a patch outcome as text for the model."""
    if result.success:
        lines = [f"✅ Successfully applied {result.applied_changes} changes to {request.file}"]
        if result.backup_path:
            lines.append(f"Backup: {result.backup_path}")
        if result.applied_changes > 0:
            lines.append("📝 Changes made:")
            for change in request.changes:
                entry = f"- {change.action} at line {change.line_start}"
                if change.action in ("replace", "insert"):
                    entry += f" (\n{change.content}\n)"
                lines.append(entry)
        return "\n".join(lines) + "\n"

    lines = [f"❌ Patch failed: {result.message}"]
    if result.failed_changes:
        lines.append("Failed changes:")
        for change in result.failed_changes:
            lines.append(f"- {change.action} at line {change.line_start}")
    if result.backup_path:
        lines.append(f"Backup: {result.backup_path}")
    return "\n".join(lines) + "\n"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


class CoderToolsHandler(ToolsHandlerPort):
    """Handler for the coding tools that can be called by an LLM.

    Dispatch is a fixed routing table keyed by tool name. `execute` is the
    boundary towards the chat loop and always returns a string.
    """

    def __init__(
        self,
        patch_uc: PatchFileUseCase,
        rollback_uc: RollbackPatchUseCase,
        create_uc: CreateItemsUseCase,
        codebase: CodebasePort,
        logger: Optional[logging.Logger] = None,
        debug: bool = False,
    ):
        """
        Initialize the coder tools handler.

        Args:
            patch_uc: Use case applying line-based patches
            rollback_uc: Use case restoring a file from its backup
            create_uc: Use case creating files and directories
            codebase: Read-only search, context and tree views
            logger: Logger instance to use for logging
            debug: Trace every tool execution at debug level
        """
        self._patch_uc = patch_uc
        self._rollback_uc = rollback_uc
        self._create_uc = create_uc
        self._codebase = codebase
        self._logger = logger or logging.getLogger(__name__)
        self._debug = debug
        self._routes: dict[str, Callable[[Any], str]] = {
            "search_codebase": self._handle_search_codebase,
            "code_context": self._handle_code_context,
            "patch_file": self._handle_patch_file,
            "rollback_patch": self._handle_rollback_patch,
            "directory_structure": self._handle_directory_structure,
            "create_item": self._handle_create_item,
            "create_multiple_items": self._handle_create_multiple_items,
            "create_project_structure": self._handle_create_project_structure,
            "create_directory_scaffold": self._handle_create_directory_scaffold,
            "create_empty_files": self._handle_create_empty_files,
        }

    def available_tools(self) -> list[ToolSpec]:
        return get_tool_definitions()

    # ------------------------- internal helpers -------------------------
    def _trace(self, category: str, payload: dict[str, Any]) -> None:
        if self._debug:
            self._logger.debug(
                f"{category}: {json.dumps(payload, ensure_ascii=False, default=str)}"
            )

    def _handle_search_codebase(self, args: SearchCodebaseArgs) -> str:
        return self._codebase.search(args.query)

    def _handle_code_context(self, args: CodeContextArgs) -> str:
        return self._codebase.context(args.file, args.line)

    def _handle_patch_file(self, args: PatchFileArgs) -> str:
        request = args.to_request()
        return format_patch_result(request, self._patch_uc.execute(request))

    def _handle_rollback_patch(self, args: RollbackPatchArgs) -> str:
        result = self._rollback_uc.execute(args.backup_path, args.original_path)
        return _dump(result.to_dict())

    def _handle_directory_structure(self, args: DirectoryStructureArgs) -> str:
        return self._codebase.list_tree(args.path, args.max_depth)

    def _handle_create_item(self, args: CreateItemArgs) -> str:
        return _dump(self._create_uc.create_item(args.to_request()).to_dict())

    def _handle_create_multiple_items(self, args: CreateMultipleItemsArgs) -> str:
        results = self._create_uc.create_multiple_items(args.to_requests())
        return _dump([r.to_dict() for r in results])

    def _handle_create_project_structure(
        self, args: CreateProjectStructureArgs
    ) -> str:
        results = self._create_uc.create_project_structure(args.structure)
        return _dump([r.to_dict() for r in results])

    def _handle_create_directory_scaffold(self, args: PathsArgs) -> str:
        results = self._create_uc.create_directory_scaffold(args.paths)
        return _dump([r.to_dict() for r in results])

    def _handle_create_empty_files(self, args: PathsArgs) -> str:
        results = self._create_uc.create_empty_files(args.paths)
        return _dump([r.to_dict() for r in results])

    # ------------------------------ dispatch -----------------------------
    def dispatch(self, name: str, arguments: dict[str, Any]) -> str:
        route = self._routes.get(name)
        if route is None:
            raise ValueError(f"Unknown tool: {name}")
        return route(decode_arguments(name, arguments))

    def execute(self, tool_call: ToolCall) -> str:
        name = tool_call.name
        raw = tool_call.arguments
        self._trace(
            "TOOL_EXECUTION_START",
            {
                "toolName": name,
                "rawArguments": raw,
                "argumentsType": type(raw).__name__,
            },
        )

        try:
            if isinstance(raw, (str, bytes)):
                arguments = json.loads(raw) if raw.strip() else {}
            else:
                arguments = raw
            self._trace("PARSED_ARGUMENTS", {"arguments": arguments})
        except (ValueError, RecursionError) as e:
            self._trace("PARSE_ERROR", {"error": str(e), "rawArgs": raw})
            return f"Failed to parse tool arguments: {e}"

        if name not in self._routes:
            self._logger.warning(f"Model requested unknown tool: {name}")
            return f"Unknown tool: {name}"

        self._logger.info(f"Executing tool: {name}")
        try:
            result = self.dispatch(name, arguments)
        except ParseError as e:
            self._trace("PARSE_ERROR", {"error": str(e), "rawArgs": raw})
            return f"Failed to parse tool arguments: {e}"
        except Exception as e:
            self._trace("TOOL_EXECUTION_ERROR", {"toolName": name, "error": str(e)})
            self._logger.error(f"Tool {name} failed: {e}")
            return f"Tool execution failed: {e}"

        self._trace(
            "TOOL_EXECUTION_SUCCESS", {"toolName": name, "resultLength": len(result)}
        )
        return result
