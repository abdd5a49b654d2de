"""
Tests for the LocalCodebaseAdapter.
"""

import os

import pytest

from src.adapters.codebase.local_codebase_adapter import (
    MAX_SEARCH_RESULTS,
    LocalCodebaseAdapter,
)
from src.exceptions import FileRepositoryError


@pytest.fixture
def adapter(path_validator, mock_logger):
    return LocalCodebaseAdapter(path_validator, mock_logger)


@pytest.fixture
def ignored_tree(workspace):
    """Add a .gitignore, an ignored build dir and a vendored dependency."""
    with open(os.path.join(workspace, ".gitignore"), "w", encoding="utf-8") as f:
        f.write("out/\n*.log\n")
    os.makedirs(os.path.join(workspace, "out"))
    with open(os.path.join(workspace, "out", "bundle.js"), "w", encoding="utf-8") as f:
        f.write("function main() {}\n")
    with open(os.path.join(workspace, "debug.log"), "w", encoding="utf-8") as f:
        f.write("main crashed\n")
    os.makedirs(os.path.join(workspace, "node_modules", "dep"))
    with open(
        os.path.join(workspace, "node_modules", "dep", "index.js"), "w", encoding="utf-8"
    ) as f:
        f.write("module.exports = main\n")
    return workspace


class TestSearch:
    """Test cases for LocalCodebaseAdapter.search."""

    def test_search_finds_lines(self, adapter):
        report = adapter.search("hello")

        assert report.startswith("Found 1 matches for 'hello' in 1 files:")
        assert os.path.join("src", "app.py") + ":" in report
        assert "  2: print('Hello, world!')" in report

    def test_search_is_case_insensitive(self, adapter):
        assert "README.md:" in adapter.search("DEMO")

    def test_search_no_matches(self, adapter):
        assert adapter.search("zzz-not-here") == "No matches found for 'zzz-not-here'."

    def test_search_respects_ignore_rules(self, adapter, ignored_tree):
        report = adapter.search("main")

        assert os.path.join("src", "app.py") + ":" in report
        assert "bundle.js" not in report
        assert "debug.log" not in report
        assert "node_modules" not in report

    def test_search_skips_binary_files(self, adapter, workspace):
        with open(os.path.join(workspace, "image.bin"), "wb") as f:
            f.write(b"\xff\xd8hello\xff")

        assert "image.bin" not in adapter.search("hello")

    def test_search_is_capped(self, adapter, workspace):
        with open(os.path.join(workspace, "many.txt"), "w", encoding="utf-8") as f:
            f.write("needle\n" * (MAX_SEARCH_RESULTS + 20))

        report = adapter.search("needle")

        assert report.startswith(f"Found {MAX_SEARCH_RESULTS} matches")
        assert f"(results truncated at {MAX_SEARCH_RESULTS} matches)" in report

    def test_empty_query(self, adapter):
        with pytest.raises(FileRepositoryError, match="must not be empty"):
            adapter.search("  ")


class TestContext:
    """Test cases for LocalCodebaseAdapter.context."""

    def test_context_marks_target_line(self, adapter, workspace):
        with open(os.path.join(workspace, "long.txt"), "w", encoding="utf-8") as f:
            f.write("\n".join(f"line {i}" for i in range(1, 61)))

        report = adapter.context("long.txt", 30)
        lines = report.splitlines()

        assert lines[0] == "long.txt (lines 10-50 of 60):"
        assert "> 30 | line 30" in lines
        assert "  10 | line 10" in lines
        assert "  50 | line 50" in lines
        assert not any("line 9" == l.split("| ")[-1] for l in lines[2:])

    def test_context_near_start(self, adapter):
        report = adapter.context("src/app.py", 1)

        assert report.splitlines()[0] == "src/app.py (lines 1-3 of 3):"
        assert "> 1 | def main():" in report

    def test_line_out_of_range(self, adapter):
        with pytest.raises(FileRepositoryError, match="out of range"):
            adapter.context("src/app.py", 99)

    def test_missing_file(self, adapter):
        with pytest.raises(FileRepositoryError, match="File does not exist"):
            adapter.context("nope.py", 1)

    def test_path_is_validated(self, adapter):
        with pytest.raises(FileRepositoryError, match="Invalid path"):
            adapter.context("../secret.txt", 1)


class TestListTree:
    """Test cases for LocalCodebaseAdapter.list_tree."""

    def test_tree_lists_directories_first(self, adapter, workspace):
        tree = adapter.list_tree()

        assert tree.splitlines() == [
            f"{os.path.basename(workspace)}/",
            "├── src/",
            "│   └── app.py",
            "└── README.md",
        ]

    def test_tree_respects_ignore_rules(self, adapter, ignored_tree):
        tree = adapter.list_tree()

        assert "out/" not in tree
        assert "debug.log" not in tree
        assert "node_modules" not in tree
        assert ".gitignore" in tree

    def test_tree_depth_limit(self, adapter, workspace):
        os.makedirs(os.path.join(workspace, "a", "b", "c", "d"))

        shallow = adapter.list_tree(max_depth=1)
        default = adapter.list_tree()

        assert "── a/" in shallow
        assert "── b/" not in shallow
        assert "── c/" in default
        assert "── d/" not in default

    def test_subdirectory(self, adapter):
        assert adapter.list_tree("src").splitlines() == ["src/", "└── app.py"]

    def test_root_by_name(self, adapter, workspace):
        assert adapter.list_tree(".") == adapter.list_tree()
        assert adapter.list_tree(workspace) == adapter.list_tree()

    def test_context_rejects_root(self, adapter):
        with pytest.raises(FileRepositoryError, match="project root"):
            adapter.context(".", 1)

    def test_not_a_directory(self, adapter):
        with pytest.raises(FileRepositoryError, match="not a directory"):
            adapter.list_tree("README.md")
