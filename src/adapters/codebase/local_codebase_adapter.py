"""
Local file system adapter for read-only codebase views (search, context, tree).
"""

import logging
import os
from typing import Optional

import pathspec
from typing_extensions import override

from src.exceptions import FileRepositoryError
from src.ports.codebase.codebase_port import CodebasePort
from src.utils.workspace import PathValidator

ALWAYS_SKIP_DIRS = frozenset(
    {
        ".git",
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        ".mypy_cache",
        ".pytest_cache",
        ".tox",
        "dist",
        "build",
        ".next",
        ".cache",
        "coverage",
    }
)
ALWAYS_SKIP_EXTENSIONS = frozenset(
    {".pyc", ".pyo", ".so", ".dylib", ".o", ".a", ".class", ".map", ".lock"}
)

MAX_SEARCH_RESULTS = 100
MAX_FILE_SIZE_BYTES = 1_000_000
CONTEXT_RADIUS = 20
DEFAULT_TREE_DEPTH = 3


class LocalCodebaseAdapter(CodebasePort):
    """Local implementation of the codebase port."""

    def __init__(
        self,
        path_validator: PathValidator,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            path_validator: Validator applied to file and directory arguments
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self._path_validator = path_validator
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

    # ------------------------- internal helpers -------------------------
    def _checked_path(self, path: str, allow_root: bool = False) -> str:
        validation = self._path_validator.validate(path, allow_root=allow_root)
        if not validation.valid:
            raise FileRepositoryError(f"Invalid path: {validation.error}")
        return self._path_validator.resolve(path)

    def _load_gitignore(self, root: str) -> Optional[pathspec.PathSpec]:
        gitignore_path = os.path.join(root, ".gitignore")
        if not os.path.isfile(gitignore_path):
            return None
        try:
            with open(gitignore_path, "r", encoding="utf-8", errors="replace") as f:
                return pathspec.PathSpec.from_lines("gitwildmatch", f)
        except OSError as e:
            self._logger.debug(f"Failed to parse .gitignore: {e}")
            return None

    def _is_ignored(
        self,
        rel_path: str,
        name: str,
        is_dir: bool,
        spec: Optional[pathspec.PathSpec],
    ) -> bool:
        if is_dir and name in ALWAYS_SKIP_DIRS:
            return True
        if not is_dir and os.path.splitext(name)[1] in ALWAYS_SKIP_EXTENSIONS:
            return True
        if spec is not None:
            check_path = rel_path.replace(os.sep, "/")
            if spec.match_file(check_path + "/" if is_dir else check_path):
                return True
        return False

    # ------------------------------ search ------------------------------
    @override
    def search(self, query: str) -> str:
        query = (query or "").strip()
        if not query:
            raise FileRepositoryError("Search query must not be empty")

        root = self._path_validator.root
        spec = self._load_gitignore(root)
        needle = query.lower()
        matches: dict[str, list[tuple[int, str]]] = {}
        count = 0

        self._logger.info(f"Searching codebase for '{query}' in {root}")
        for current, dirs, files in os.walk(root):
            rel_dir = os.path.relpath(current, root)
            dirs[:] = sorted(
                d
                for d in dirs
                if not self._is_ignored(
                    os.path.normpath(os.path.join(rel_dir, d)), d, True, spec
                )
            )
            for fname in sorted(files):
                rel_path = os.path.normpath(os.path.join(rel_dir, fname))
                if self._is_ignored(rel_path, fname, False, spec):
                    continue
                path = os.path.join(current, fname)
                try:
                    if os.path.getsize(path) > MAX_FILE_SIZE_BYTES:
                        continue
                    with open(path, "r", encoding="utf-8") as f:
                        for i, line in enumerate(f, start=1):
                            if needle in line.lower():
                                matches.setdefault(rel_path, []).append(
                                    (i, line.rstrip("\n"))
                                )
                                count += 1
                                if count >= MAX_SEARCH_RESULTS:
                                    break
                except (UnicodeDecodeError, OSError):
                    # Skip binary or unreadable files
                    continue
                if count >= MAX_SEARCH_RESULTS:
                    break
            if count >= MAX_SEARCH_RESULTS:
                break

        if not matches:
            return f"No matches found for '{query}'."

        out = [f"Found {count} matches for '{query}' in {len(matches)} files:"]
        for rel_path, hits in matches.items():
            out.append("")
            out.append(f"{rel_path}:")
            for line_no, line in hits:
                out.append(f"  {line_no}: {line.strip()}")
        if count >= MAX_SEARCH_RESULTS:
            out.append("")
            out.append(f"(results truncated at {MAX_SEARCH_RESULTS} matches)")
        return "\n".join(out)

    # ------------------------------ context -----------------------------
    @override
    def context(self, file: str, line: int) -> str:
        path = self._checked_path(file)
        if not os.path.isfile(path):
            raise FileRepositoryError(f"File does not exist: {file}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().split("\n")
        except UnicodeDecodeError:
            raise FileRepositoryError(f"File is not valid UTF-8 text: {file}")
        except OSError as e:
            raise FileRepositoryError(f"Failed to read {file}: {str(e)}")

        if line < 1 or line > len(lines):
            raise FileRepositoryError(
                f"Line {line} is out of range for {file} (1-{len(lines)})"
            )

        start = max(1, line - CONTEXT_RADIUS)
        end = min(len(lines), line + CONTEXT_RADIUS)
        width = len(str(end))
        out = [f"{file} (lines {start}-{end} of {len(lines)}):", ""]
        for i in range(start, end + 1):
            marker = ">" if i == line else " "
            out.append(f"{marker} {i:>{width}} | {lines[i - 1]}")
        return "\n".join(out)

    # ------------------------------- tree -------------------------------
    @override
    def list_tree(
        self, path: Optional[str] = None, max_depth: Optional[int] = None
    ) -> str:
        directory = (
            self._checked_path(path, allow_root=True)
            if path
            else self._path_validator.root
        )
        if not os.path.isdir(directory):
            raise FileRepositoryError(f"Path is not a directory: {path}")
        depth = max_depth if max_depth and max_depth > 0 else DEFAULT_TREE_DEPTH

        spec = self._load_gitignore(directory)
        out = [f"{os.path.basename(directory) or directory}/"]
        self._render_tree(directory, directory, "", 1, depth, spec, out)
        return "\n".join(out)

    def _render_tree(
        self,
        base: str,
        current: str,
        prefix: str,
        level: int,
        max_depth: int,
        spec: Optional[pathspec.PathSpec],
        out: list[str],
    ) -> None:
        try:
            names = os.listdir(current)
        except OSError as e:
            self._logger.warning(f"Could not list {current}: {e}")
            return

        entries: list[tuple[str, bool]] = []
        for name in names:
            full = os.path.join(current, name)
            is_dir = os.path.isdir(full)
            rel = os.path.relpath(full, base)
            if not self._is_ignored(rel, name, is_dir, spec):
                entries.append((name, is_dir))
        # directories first, then files, each alphabetically
        entries.sort(key=lambda e: (not e[1], e[0].lower()))

        for i, (name, is_dir) in enumerate(entries):
            last = i == len(entries) - 1
            connector = "└── " if last else "├── "
            out.append(f"{prefix}{connector}{name}{'/' if is_dir else ''}")
            if is_dir and level < max_depth:
                extension = "    " if last else "│   "
                self._render_tree(
                    base,
                    os.path.join(current, name),
                    prefix + extension,
                    level + 1,
                    max_depth,
                    spec,
                    out,
                )
