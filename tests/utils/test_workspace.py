"""
Tests for the PathValidator.
"""

import os

import pytest

from src.utils.workspace import PathValidator, is_within


class TestPathValidator:
    """Test cases for PathValidator.validate and resolve."""

    @pytest.mark.parametrize("path", ["src/app.py", "README.md", "./notes.txt", "a/b/c"])
    def test_accepts_relative_paths(self, workspace, path):
        """Relative paths inside the project are accepted."""
        result = PathValidator(workspace).validate(path)

        assert result.valid is True
        assert result.error is None

    @pytest.mark.parametrize("path", ["", "   "])
    def test_rejects_empty_path(self, workspace, path):
        """Empty or blank paths are rejected."""
        result = PathValidator(workspace).validate(path)

        assert result.valid is False
        assert result.error == "Path must be a non-empty string"

    def test_rejects_non_string(self, workspace):
        """Non-string values are rejected like empty paths."""
        result = PathValidator(workspace).validate(None)  # type: ignore[arg-type]

        assert result.valid is False

    @pytest.mark.parametrize("path", ["../etc/passwd", "src/../../outside.txt", ".."])
    def test_rejects_traversal(self, workspace, path):
        """Paths escaping through '..' are rejected."""
        result = PathValidator(workspace).validate(path)

        assert result.valid is False
        assert result.error == 'Path cannot contain ".." (directory traversal)'

    def test_collapsed_parent_segment_is_allowed(self, workspace):
        """A '..' that normalizes away inside the project is harmless."""
        result = PathValidator(workspace).validate("src/../README.md")

        assert result.valid is True

    def test_rejects_absolute_path_outside_root(self, workspace, tmp_path):
        """Absolute paths outside the root are rejected."""
        outside = str(tmp_path / "elsewhere" / "file.txt")

        result = PathValidator(workspace).validate(outside)

        assert result.valid is False
        assert result.error == "Cannot create files outside current project directory"

    def test_accepts_absolute_path_inside_root(self, workspace):
        """Absolute paths under the root are accepted."""
        inside = os.path.join(workspace, "src", "new.py")

        assert PathValidator(workspace).validate(inside).valid is True

    def test_sibling_with_common_prefix_is_outside(self, workspace):
        """'/tmp/project-other' is not inside '/tmp/project'."""
        sibling = workspace + "-other" + os.sep + "file.txt"

        assert PathValidator(workspace).validate(sibling).valid is False

    @pytest.mark.parametrize("name", ["bad<name.txt", "what?.py", "a|b", 'quote".md', "star*.js"])
    def test_rejects_unsafe_filename(self, workspace, name):
        """Reserved characters in the file name are rejected."""
        result = PathValidator(workspace).validate(os.path.join("src", name))

        assert result.valid is False
        assert result.error == "Filename contains invalid characters"

    def test_root_defaults_to_cwd(self, workspace):
        """Without an explicit root, the current directory is used."""
        validator = PathValidator()

        assert validator.root == workspace

    def test_root_follows_cwd_changes(self, workspace, monkeypatch):
        """The default root is read at call time."""
        validator = PathValidator()
        monkeypatch.chdir(os.path.join(workspace, "src"))

        assert validator.root == os.path.join(workspace, "src")

    def test_resolve_anchors_relative_paths_at_root(self, workspace):
        """resolve() joins relative paths to the root."""
        validator = PathValidator(workspace)

        assert validator.resolve("src/app.py") == os.path.join(workspace, "src", "app.py")

    @pytest.mark.parametrize("path", [".", "./", "src/..", ".//."])
    def test_rejects_root_itself(self, workspace, path):
        """Paths naming the project root are rejected."""
        result = PathValidator(workspace).validate(path)

        assert result.valid is False
        assert result.error == "Path cannot refer to the project root directory"

    def test_rejects_absolute_root(self, workspace):
        """The absolute root path, with or without a trailing separator, is rejected."""
        validator = PathValidator()

        assert validator.validate(workspace).valid is False
        assert validator.validate(workspace + os.sep).valid is False

    def test_allow_root_for_read_only_callers(self, workspace):
        """allow_root=True lets the root itself through."""
        validator = PathValidator(workspace)

        assert validator.validate(".", allow_root=True).valid is True
        assert validator.validate(workspace, allow_root=True).valid is True
        assert validator.validate("..", allow_root=True).valid is False

    def test_validation_does_not_touch_filesystem(self, workspace):
        """Validation of a missing path neither fails nor creates anything."""
        validator = PathValidator(workspace)

        assert validator.validate("missing/dir/file.txt").valid is True
        assert not os.path.exists(os.path.join(workspace, "missing"))


class TestIsWithin:
    """Test cases for the is_within helper."""

    def test_root_itself(self, tmp_path):
        assert is_within(str(tmp_path), str(tmp_path)) is True

    def test_descendant(self, tmp_path):
        assert is_within(str(tmp_path), str(tmp_path / "a" / "b")) is True

    def test_parent(self, tmp_path):
        assert is_within(str(tmp_path / "a"), str(tmp_path)) is False
