"""Exception hierarchy shared by every proser component.

Errors are wrapped with contextual identifiers (generator name, file path,
directory path) at each boundary they cross, so a top-level failure message
names both the failing operation and the generator/path responsible.
"""

from __future__ import annotations

from pathlib import Path, PurePath


class ProserError(Exception):
    """Base class for all proser failures."""


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StorageError(ProserError):
    """Raised when the storage medium refuses an operation."""

    def __init__(self, path: str | PurePath, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {path}")


class StorageNotFoundError(StorageError):
    """Raised when a path (or file) does not exist."""

    def __init__(self, path: str | PurePath, message: str = "Path does not exist") -> None:
        super().__init__(path, message)


class TraversalError(StorageError):
    """Raised when enumerating a directory tree fails."""

    def __init__(self, root: str | PurePath, message: str = "Failed to enumerate") -> None:
        self.root = Path(root)
        super().__init__(root, message)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class ProjectTypeNotFoundError(ProserError, KeyError):
    """Raised when a project type name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        ProserError.__init__(self, f"Unknown project type: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class NamespaceConflictError(ProserError):
    """Raised when two generators of one project type claim overlapping outputs."""

    def __init__(self, first: str, second: str, detail: str) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Generators {first!r} and {second!r} own overlapping outputs ({detail})"
        )


class DuplicatePathError(ProserError, ValueError):
    """Raised when a generator emits the same relative path twice."""

    def __init__(self, path: PurePath) -> None:
        self.path = path
        super().__init__(f"Duplicate output path: {path}")


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class GeneratorError(ProserError):
    """Raised when a generator fails to compute its output."""

    def __init__(self, generator: str, message: str) -> None:
        self.generator = generator
        super().__init__(f"Generator {generator} failed: {message}")


class WriteError(GeneratorError):
    """Raised when persisting one generated file fails."""

    def __init__(self, generator: str, path: str | PurePath, message: str) -> None:
        self.path = Path(path)
        super().__init__(generator, f"could not write {path}: {message}")


class PipelineError(ProserError):
    """Raised when a pipeline run aborts."""

    def __init__(self, generator: str, message: str) -> None:
        self.generator = generator
        super().__init__(message)
