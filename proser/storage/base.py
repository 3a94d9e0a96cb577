"""Storage contract shared by the real filesystem and the in-memory double.

The pipeline only ever talks to a ``Storage``.  Both implementations must
behave identically for any sequence of operations under a common root: the
same ``enumerate`` ordering, the same ``info`` answers, and the same error
kinds.  That parity is what lets ``MemoryStorage`` stand in for the disk in
tests.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from proser.errors import StorageNotFoundError

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


def normalize(path: str | Path) -> Path:
    """Return *path* lexically cleaned (``a/./b/../c`` -> ``a/c``)."""
    return Path(os.path.normpath(os.fspath(path)))


class WalkAction(Enum):
    """Value a visitor may return to steer ``Storage.enumerate``."""

    CONTINUE = "continue"
    SKIP = "skip"


@dataclass(frozen=True)
class EntryInfo:
    """Result of ``Storage.info``."""

    path: Path
    is_dir: bool
    size: int = 0


# Called with (path, is_dir).  Returning ``WalkAction.SKIP`` for a directory
# prunes its subtree; ``None`` or ``CONTINUE`` keeps walking.
Visitor = Callable[[Path, bool], "WalkAction | None"]


class Storage(ABC):
    """Minimal hierarchical read/write contract."""

    @abstractmethod
    def write_file(self, path: str | Path, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        """Create or overwrite the file at *path*.

        Missing ancestor directories are created.  Raises ``StorageError``
        if the medium refuses the write.
        """

    @abstractmethod
    def make_directory_tree(self, path: str | Path, mode: int = DEFAULT_DIR_MODE) -> None:
        """Create *path* and every missing ancestor.  Idempotent."""

    @abstractmethod
    def enumerate(self, root: str | Path, visit: Visitor) -> None:
        """Pre-order walk from *root*, calling *visit* for every entry.

        *root* itself is visited first.  Siblings are visited in
        lexicographic name order.  Exceptions raised by *visit* propagate
        unchanged and abort the walk.

        Raises:
            StorageNotFoundError: If *root* does not exist.
            TraversalError: If listing a directory fails.
        """

    @abstractmethod
    def info(self, path: str | Path) -> EntryInfo:
        """Return existence details for *path*.

        Raises:
            StorageNotFoundError: If *path* does not exist.
        """

    @abstractmethod
    def read_file(self, path: str | Path) -> bytes:
        """Return the content of the file at *path*.

        Raises:
            StorageNotFoundError: If no file exists at *path*.
        """

    def exists(self, path: str | Path) -> bool:
        """Return ``True`` if *path* exists (file or directory)."""
        try:
            self.info(path)
        except StorageNotFoundError:
            return False
        return True

    def walk(self, root: str | Path) -> list[tuple[Path, bool]]:
        """Return every ``(path, is_dir)`` pair ``enumerate`` would visit."""
        entries: list[tuple[Path, bool]] = []

        def _collect(path: Path, is_dir: bool) -> None:
            entries.append((path, is_dir))

        self.enumerate(root, _collect)
        return entries
