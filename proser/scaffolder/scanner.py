"""Depth-bounded directory discovery for per-directory guidance files.

The scanner walks a tree through ``Storage.enumerate`` and returns every
directory that should receive an ``AGENT.md``: not the root, nothing hidden,
nothing on the skip list (or beneath one), and nothing deeper than
``max_depth`` levels below the root.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from pathlib import Path

from proser.config import DEFAULT_SCAN_DEPTH
from proser.errors import StorageNotFoundError, TraversalError
from proser.storage.base import Storage, WalkAction, normalize

# Build output, dependency caches and tooling state.  Hidden names are
# filtered separately; the dotted entries here document intent.
DEFAULT_SKIP_DIRS: tuple[str, ...] = (
    # JavaScript / Node
    "node_modules",
    "bower_components",
    ".next",
    ".nuxt",
    # Build outputs
    "obj",
    "bin",
    "dist",
    "build",
    "out",
    "target",
    "output",
    # Go
    "vendor",
    # Python
    "__pycache__",
    ".venv",
    "venv",
    "env",
    ".eggs",
    "*.egg-info",
    ".pytest_cache",
    # Java
    ".gradle",
    ".mvn",
    # IDE / VCS
    ".idea",
    ".vscode",
    ".git",
    # Coverage and scratch
    "coverage",
    ".nyc_output",
    "tmp",
    "temp",
    "logs",
)


class SkipList:
    """Set of directory names (or glob patterns) never descended into."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._exact: set[str] = set()
        self._patterns: list[str] = []
        for name in names:
            self.add(name)

    @classmethod
    def default(cls) -> "SkipList":
        return cls(DEFAULT_SKIP_DIRS)

    def add(self, name: str) -> None:
        if any(ch in name for ch in "*?["):
            self._patterns.append(name)
        else:
            self._exact.add(name)

    def matches(self, name: str) -> bool:
        """Return ``True`` if a directory called *name* must be skipped."""
        if name in self._exact:
            return True
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self._patterns)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.matches(name)

    def __iter__(self):
        yield from sorted(self._exact)
        yield from self._patterns

    def __len__(self) -> int:
        return len(self._exact) + len(self._patterns)


class DirectoryScanner:
    """Collects candidate directories under a root via ``Storage``."""

    def __init__(
        self,
        storage: Storage,
        max_depth: int = DEFAULT_SCAN_DEPTH,
        skip_list: SkipList | None = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.storage = storage
        self.max_depth = max_depth
        self.skip_list = skip_list if skip_list is not None else SkipList.default()

    def scan(self, root: str | Path) -> list[Path]:
        """Return qualifying directories under *root* in traversal order.

        Raises:
            TraversalError: If the underlying enumeration fails.
        """
        root = normalize(root)
        found: list[Path] = []

        def visit(path: Path, is_dir: bool) -> WalkAction | None:
            if not is_dir or path == root:
                return None
            if path.name.startswith(".") or self.skip_list.matches(path.name):
                return WalkAction.SKIP
            depth = self._depth(root, path)
            if depth is None or depth > self.max_depth:
                return WalkAction.SKIP
            found.append(path)
            return None

        try:
            self.storage.enumerate(root, visit)
        except StorageNotFoundError as exc:
            raise TraversalError(root, "Scan root does not exist") from exc
        except TraversalError as exc:
            if exc.root == root:
                raise
            raise TraversalError(root, f"Failed to scan ({exc})") from exc
        return found

    @staticmethod
    def _depth(root: Path, path: Path) -> int | None:
        try:
            rel = path.relative_to(root)
        except ValueError:
            return None
        return len(rel.parts)
