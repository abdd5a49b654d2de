"""
Tests for the typed decode of tool arguments.
"""

from unittest.mock import MagicMock

import pytest

from src.entities.Patch import PatchChange
from src.exceptions import ParseError
from src.use_cases.tools.schemas import (
    TOOL_ARGUMENTS,
    CreateItemArgs,
    DirectoryStructureArgs,
    PatchFileArgs,
    RollbackPatchArgs,
    decode_arguments,
)


class TestDecodeArguments:
    """Test cases for decode_arguments."""

    def test_patch_file_camel_case(self):
        args = decode_arguments(
            "patch_file",
            {
                "file": "a.py",
                "changes": [
                    {"action": "replace", "lineStart": 2, "lineEnd": 3, "content": "x"},
                    {"action": "delete", "lineStart": 7},
                ],
            },
        )

        assert isinstance(args, PatchFileArgs)
        request = args.to_request()
        assert request.file == "a.py"
        assert request.changes == [
            PatchChange("replace", 2, 3, "x"),
            PatchChange("delete", 7, None, None),
        ]

    def test_snake_case_names_are_accepted(self):
        args = decode_arguments(
            "rollback_patch", {"backup_path": "/b", "original_path": "a.py"}
        )

        assert isinstance(args, RollbackPatchArgs)
        assert (args.backup_path, args.original_path) == ("/b", "a.py")

    def test_empty_changes_rejected(self):
        with pytest.raises(ParseError, match="changes"):
            decode_arguments("patch_file", {"file": "a.py", "changes": []})

    def test_unknown_action_rejected(self):
        with pytest.raises(ParseError, match="action"):
            decode_arguments(
                "patch_file",
                {"file": "a.py", "changes": [{"action": "append", "lineStart": 1}]},
            )

    def test_missing_required_field_lists_location(self):
        with pytest.raises(ParseError) as excinfo:
            decode_arguments("code_context", {"file": "a.py"})

        assert "line" in str(excinfo.value)

    def test_non_object_arguments(self):
        with pytest.raises(ParseError, match="must be a JSON object"):
            decode_arguments("search_codebase", ["query"])

    def test_recursion_during_validation(self, monkeypatch):
        model = MagicMock()
        model.model_validate.side_effect = RecursionError
        monkeypatch.setitem(TOOL_ARGUMENTS, "directory_structure", model)

        with pytest.raises(ParseError, match="nested too deeply"):
            decode_arguments("directory_structure", {"path": "src"})

    def test_optional_arguments(self):
        args = decode_arguments("directory_structure", None)

        assert isinstance(args, DirectoryStructureArgs)
        assert args.path is None and args.max_depth is None
        assert decode_arguments("directory_structure", {"maxDepth": 2}).max_depth == 2

    def test_create_item_defaults(self):
        args = decode_arguments("create_item", {"path": "x", "type": "file"})

        assert isinstance(args, CreateItemArgs)
        request = args.to_request()
        assert request.overwrite is False
        assert request.content is None

    def test_unknown_tool(self):
        with pytest.raises(ValueError, match="Unknown tool: nope"):
            decode_arguments("nope", {})
