"""
Tool vocabulary exposed to the model: names, descriptions and parameter schemas.

The schemas are descriptive only; arguments are checked again by the typed
decode step and by each use case.
"""

import copy

from src.ports.llm.tools_port import ToolSpec

_CHANGE_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "action": {
            "type": "string",
            "enum": ["replace", "insert", "delete"],
            "description": "Operation to perform",
        },
        "lineStart": {
            "type": "integer",
            "description": "1-based line number where the change starts",
        },
        "lineEnd": {
            "type": "integer",
            "description": "1-based last line for replace/delete (defaults to lineStart)",
        },
        "content": {
            "type": "string",
            "description": "New text for replace/insert; must be omitted for delete",
        },
    },
    "required": ["action", "lineStart"],
}

_CREATE_ITEM_PROPERTIES: dict[str, object] = {
    "path": {
        "type": "string",
        "description": "Path where to create the file or directory (relative to project root)",
    },
    "type": {
        "type": "string",
        "enum": ["file", "directory"],
        "description": "Type of item to create: 'file' or 'directory'",
    },
    "content": {
        "type": "string",
        "description": "Content for the file (only used when type is 'file'). Optional, defaults to empty.",
    },
    "overwrite": {
        "type": "boolean",
        "description": "Whether to overwrite if item already exists. Defaults to false.",
    },
}

_TOOL_DEFINITIONS: tuple[ToolSpec, ...] = (
    {
        "name": "search_codebase",
        "description": (
            "Search through the codebase content for specific code patterns, functions, "
            "variables, or text. Returns actual code snippets with line numbers and file locations."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search term to find in code content (function, variable or class names, comments, any text)",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": "code_context",
        "description": (
            "Get detailed code context around a specific line in a file. Shows 20 lines "
            "before and after the target line."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "file": {
                    "type": "string",
                    "description": "Path to the file (e.g., 'src/components/Button.js' or 'index.js')",
                },
                "line": {
                    "type": "integer",
                    "description": "Line number to get context around",
                },
            },
            "required": ["file", "line"],
        },
    },
    {
        "name": "patch_file",
        "description": (
            "Apply targeted patches to a file with precise line-based operations "
            "(replace, insert, delete). All line numbers refer to the file before the "
            "patch. Creates an automatic backup and validates every change before "
            "applying; if anything fails the file is left untouched."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "file": {
                    "type": "string",
                    "description": "Path to the file to patch (e.g., 'src/components/Button.js')",
                },
                "changes": {
                    "type": "array",
                    "description": "Patch operations to apply",
                    "items": _CHANGE_ITEM_SCHEMA,
                },
            },
            "required": ["file", "changes"],
        },
    },
    {
        "name": "rollback_patch",
        "description": "Rollback a file to its state before a patch operation using the backup file.",
        "parameters": {
            "type": "object",
            "properties": {
                "backupPath": {
                    "type": "string",
                    "description": "Path to the backup file (returned from patch_file)",
                },
                "originalPath": {
                    "type": "string",
                    "description": "Path to the original file to restore",
                },
            },
            "required": ["backupPath", "originalPath"],
        },
    },
    {
        "name": "directory_structure",
        "description": (
            "Get a tree-like structure of a directory up to 3 levels deep. Respects "
            ".gitignore rules and shows both files and folders."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Directory to analyze (optional, defaults to the project root)",
                },
                "maxDepth": {
                    "type": "integer",
                    "description": "Maximum depth to traverse (optional, defaults to 3)",
                },
            },
            "required": [],
        },
    },
    {
        "name": "create_item",
        "description": (
            "Create a new file or directory in the project. Automatically creates parent "
            "directories if needed. Supports file content and overwrite options."
        ),
        "parameters": {
            "type": "object",
            "properties": _CREATE_ITEM_PROPERTIES,
            "required": ["path", "type"],
        },
    },
    {
        "name": "create_multiple_items",
        "description": (
            "Create multiple files and directories in a single operation. Each item is "
            "attempted and reported independently."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "description": "Items to create, each with path, type and optionally content and overwrite",
                    "items": {
                        "type": "object",
                        "properties": _CREATE_ITEM_PROPERTIES,
                        "required": ["path", "type"],
                    },
                },
            },
            "required": ["items"],
        },
    },
    {
        "name": "create_project_structure",
        "description": (
            "Create a project structure with directories and empty files only. Use "
            "patch_file afterward to add content to files."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "structure": {
                    "type": "object",
                    "description": "Keys are paths, values are either 'directory' or 'file'. Files are created empty.",
                    "additionalProperties": {
                        "type": "string",
                        "enum": ["file", "directory"],
                    },
                },
            },
            "required": ["structure"],
        },
    },
    {
        "name": "create_directory_scaffold",
        "description": "Create multiple directories at once.",
        "parameters": {
            "type": "object",
            "properties": {
                "paths": {
                    "type": "array",
                    "description": "Directory paths to create",
                    "items": {"type": "string"},
                },
            },
            "required": ["paths"],
        },
    },
    {
        "name": "create_empty_files",
        "description": (
            "Create multiple empty files at once. Use patch_file afterward to add content."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "paths": {
                    "type": "array",
                    "description": "File paths to create (as empty files)",
                    "items": {"type": "string"},
                },
            },
            "required": ["paths"],
        },
    },
)

TOOL_NAMES: tuple[str, ...] = tuple(spec["name"] for spec in _TOOL_DEFINITIONS)


def get_tool_definitions() -> list[ToolSpec]:
    """Return a fresh copy of every tool definition."""
    return copy.deepcopy(list(_TOOL_DEFINITIONS))
