"""Storage backed by the real filesystem."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from proser.errors import StorageError, StorageNotFoundError, TraversalError

from .base import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    EntryInfo,
    Storage,
    Visitor,
    WalkAction,
    normalize,
)


class OSStorage(Storage):
    """``Storage`` implementation using ``os`` calls.

    Symbolic links to directories are reported as non-directories during
    enumeration and never followed, so a link cycle cannot trap the walk.
    """

    def write_file(self, path: str | Path, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        target = normalize(path)
        try:
            os.makedirs(target.parent, mode=DEFAULT_DIR_MODE, exist_ok=True)
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except OSError as exc:
            raise StorageError(target, f"Failed to write file ({_reason(exc)})") from exc

    def make_directory_tree(self, path: str | Path, mode: int = DEFAULT_DIR_MODE) -> None:
        target = normalize(path)
        try:
            os.makedirs(target, mode=mode, exist_ok=True)
        except OSError as exc:
            raise StorageError(target, f"Failed to create directory ({_reason(exc)})") from exc

    def enumerate(self, root: str | Path, visit: Visitor) -> None:
        start = normalize(root)
        try:
            st = os.stat(start)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise StorageNotFoundError(start) from exc
        except OSError as exc:
            raise TraversalError(start, f"Failed to stat root ({_reason(exc)})") from exc
        self._walk(start, stat.S_ISDIR(st.st_mode), visit)

    def _walk(self, path: Path, is_dir: bool, visit: Visitor) -> None:
        action = visit(path, is_dir)
        if not is_dir or action is WalkAction.SKIP:
            return
        try:
            with os.scandir(path) as it:
                children = sorted(
                    (entry.name, entry.is_dir(follow_symlinks=False)) for entry in it
                )
        except OSError as exc:
            raise TraversalError(path, f"Failed to list directory ({_reason(exc)})") from exc
        for name, child_is_dir in children:
            self._walk(path / name, child_is_dir, visit)

    def info(self, path: str | Path) -> EntryInfo:
        target = normalize(path)
        try:
            st = os.stat(target)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise StorageNotFoundError(target) from exc
        except OSError as exc:
            raise StorageError(target, f"Failed to stat ({_reason(exc)})") from exc
        if stat.S_ISDIR(st.st_mode):
            return EntryInfo(path=target, is_dir=True)
        return EntryInfo(path=target, is_dir=False, size=st.st_size)

    def read_file(self, path: str | Path) -> bytes:
        target = normalize(path)
        try:
            with open(target, "rb") as handle:
                return handle.read()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise StorageNotFoundError(target, "File not found") from exc
        except OSError as exc:
            raise StorageError(target, f"Failed to read file ({_reason(exc)})") from exc


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)
