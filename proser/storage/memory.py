"""In-memory ``Storage`` used as a deterministic test double.

Paths are cleaned lexically and kept in two tables: file contents and the
set of known directories.  Writing a file registers every ancestor as a
directory, mirroring the recursive-create semantics of ``OSStorage``.  The
logical current directory ``"."`` always exists.
"""

from __future__ import annotations

from pathlib import Path

from proser.errors import StorageError, StorageNotFoundError

from .base import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    EntryInfo,
    Storage,
    Visitor,
    WalkAction,
    normalize,
)

_CURRENT_DIR = Path(".")


class MemoryStorage(Storage):
    """Dictionary-backed ``Storage``.

    Permission bits are accepted for contract compatibility and ignored.
    """

    def __init__(self) -> None:
        self._files: dict[Path, bytes] = {}
        self._dirs: set[Path] = set()

    # -- Writes --------------------------------------------------------------

    def write_file(self, path: str | Path, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        target = normalize(path)
        if self._is_dir(target):
            raise StorageError(target, "Failed to write file (Is a directory)")
        self._check_ancestors(target, "Failed to write file")
        self._dirs.update(target.parents)
        self._files[target] = bytes(data)

    def make_directory_tree(self, path: str | Path, mode: int = DEFAULT_DIR_MODE) -> None:
        target = normalize(path)
        if target in self._files:
            raise StorageError(target, "Failed to create directory (File exists)")
        self._check_ancestors(target, "Failed to create directory")
        self._dirs.add(target)
        self._dirs.update(target.parents)

    # -- Reads ---------------------------------------------------------------

    def enumerate(self, root: str | Path, visit: Visitor) -> None:
        start = normalize(root)
        if start in self._files:
            visit(start, False)
            return
        if not self._is_dir(start):
            raise StorageNotFoundError(start)
        self._walk(start, visit)

    def _walk(self, path: Path, visit: Visitor) -> None:
        if visit(path, True) is WalkAction.SKIP:
            return
        for name, is_dir in self._children(path):
            child = path / name
            if is_dir:
                self._walk(child, visit)
            else:
                visit(child, False)

    def info(self, path: str | Path) -> EntryInfo:
        target = normalize(path)
        if target in self._files:
            return EntryInfo(path=target, is_dir=False, size=len(self._files[target]))
        if self._is_dir(target):
            return EntryInfo(path=target, is_dir=True)
        raise StorageNotFoundError(target)

    def read_file(self, path: str | Path) -> bytes:
        target = normalize(path)
        try:
            return self._files[target]
        except KeyError:
            raise StorageNotFoundError(target, "File not found") from None

    def files(self) -> dict[Path, bytes]:
        """Return a copy of every stored file, keyed by cleaned path."""
        return dict(self._files)

    # -- Internal helpers ----------------------------------------------------

    def _is_dir(self, path: Path) -> bool:
        return path in self._dirs or path == _CURRENT_DIR

    def _check_ancestors(self, path: Path, message: str) -> None:
        for parent in path.parents:
            if parent in self._files:
                raise StorageError(path, f"{message} (Not a directory)")

    def _children(self, path: Path) -> list[tuple[str, bool]]:
        """Return ``(name, is_dir)`` for the direct children of *path*, sorted."""
        children: dict[str, bool] = {}
        for directory in self._dirs:
            if directory != path and directory.parent == path:
                children[directory.name] = True
        for file_path in self._files:
            if file_path.parent == path:
                children[file_path.name] = False
        return sorted(children.items())
