"""
Tests for the tool registry.
"""

from src.use_cases.tools.registry import TOOL_NAMES, get_tool_definitions
from src.use_cases.tools.schemas import TOOL_ARGUMENTS


class TestToolRegistry:
    """Test cases for get_tool_definitions."""

    def test_exposes_every_tool(self):
        names = [spec["name"] for spec in get_tool_definitions()]

        assert names == [
            "search_codebase",
            "code_context",
            "patch_file",
            "rollback_patch",
            "directory_structure",
            "create_item",
            "create_multiple_items",
            "create_project_structure",
            "create_directory_scaffold",
            "create_empty_files",
        ]
        assert tuple(names) == TOOL_NAMES

    def test_every_tool_has_a_decoder(self):
        assert set(TOOL_NAMES) == set(TOOL_ARGUMENTS)

    def test_required_parameters(self):
        required = {
            spec["name"]: spec["parameters"]["required"]
            for spec in get_tool_definitions()
        }

        assert required["patch_file"] == ["file", "changes"]
        assert required["rollback_patch"] == ["backupPath", "originalPath"]
        assert required["create_item"] == ["path", "type"]
        assert required["directory_structure"] == []

    def test_definitions_are_copies(self):
        """Mutating a returned definition does not leak into the registry."""
        first = get_tool_definitions()
        first[0]["name"] = "hacked"
        first[2]["parameters"]["properties"].clear()

        second = get_tool_definitions()

        assert second[0]["name"] == "search_codebase"
        assert "changes" in second[2]["parameters"]["properties"]
