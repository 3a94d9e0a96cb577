"""Core generator contract: context, ordered file sets, output namespaces.

A generator is a pure function from a ``GenerateContext`` to a ``FileSet``.
It never writes; the ``Writer`` persists what it returns.  Each generator
also declares the ``OutputNamespace`` it owns so a project type can prove
that no two of its generators will ever write the same path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from proser.config import Config
from proser.errors import DuplicatePathError
from proser.scaffolder.languages import LanguageRegistry, default_language_registry
from proser.scaffolder.templates import TemplateRenderer
from proser.storage.base import Storage


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GenerateContext:
    """Everything a generator may read.  Built once per run."""

    config: Config
    root: Path
    storage: Storage

    def __post_init__(self) -> None:
        if not Path(self.root).is_absolute():
            raise ValueError(f"Target root must be absolute: {self.root}")


# ---------------------------------------------------------------------------
# File sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeneratedFile:
    """One output: a root-relative path and its bytes."""

    path: PurePosixPath
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class FileSet:
    """Insertion-ordered, duplicate-free collection of generated files."""

    def __init__(self) -> None:
        self._files: dict[PurePosixPath, bytes] = {}

    def add(self, path: str | PurePosixPath, content: str | bytes) -> GeneratedFile:
        """Append a file.

        Raises:
            ValueError: If *path* is empty, absolute or escapes the root.
            DuplicatePathError: If *path* was already added.
        """
        rel = _relative_path(path)
        if rel in self._files:
            raise DuplicatePathError(rel)
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self._files[rel] = data
        return GeneratedFile(rel, data)

    def paths(self) -> list[PurePosixPath]:
        return list(self._files)

    def get(self, path: str | PurePosixPath) -> bytes | None:
        return self._files.get(PurePosixPath(path))

    def text(self, path: str | PurePosixPath) -> str:
        """Return the decoded content stored for *path*.  ``KeyError`` if absent."""
        return self._files[PurePosixPath(path)].decode("utf-8")

    def __iter__(self) -> Iterator[GeneratedFile]:
        for path, content in self._files.items():
            yield GeneratedFile(path, content)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PurePosixPath)):
            return False
        return PurePosixPath(path) in self._files

    def __repr__(self) -> str:
        return f"FileSet({[str(p) for p in self._files]!r})"


def _relative_path(path: str | PurePosixPath) -> PurePosixPath:
    rel = PurePosixPath(path)
    if rel.is_absolute():
        raise ValueError(f"Output path must be relative: {path}")
    if ".." in rel.parts:
        raise ValueError(f"Output path escapes the target root: {path}")
    if not rel.parts:
        raise ValueError("Output path must not be empty")
    return rel


# ---------------------------------------------------------------------------
# Output namespaces
# ---------------------------------------------------------------------------


def _has_hidden_part(parts: tuple[str, ...]) -> bool:
    return any(part.startswith(".") for part in parts)


@dataclass(frozen=True)
class OutputNamespace:
    """The slice of relative output paths one generator owns.

    Three shapes exist:

    * ``file("AGENTS.md")`` owns exactly one path.
    * ``directory(".github/agents")`` owns every path strictly below a prefix.
    * ``per_directory("AGENT.md")`` owns a fixed file name inside any
      non-hidden subdirectory (the scanner never yields hidden ones).
    """

    prefix: PurePosixPath | None = None
    is_directory: bool = False
    filename: str | None = None

    @classmethod
    def file(cls, path: str) -> "OutputNamespace":
        return cls(prefix=_relative_path(path))

    @classmethod
    def directory(cls, path: str) -> "OutputNamespace":
        return cls(prefix=_relative_path(path), is_directory=True)

    @classmethod
    def per_directory(cls, filename: str) -> "OutputNamespace":
        return cls(filename=filename)

    def contains(self, path: str | PurePosixPath) -> bool:
        """Return ``True`` if *path* falls inside this namespace."""
        rel = PurePosixPath(path)
        if self.filename is not None:
            parents = rel.parts[:-1]
            return (
                rel.name == self.filename
                and len(parents) > 0
                and not _has_hidden_part(parents)
            )
        if self.is_directory:
            return rel != self.prefix and self.prefix in rel.parents
        return rel == self.prefix

    def overlaps(self, other: "OutputNamespace") -> bool:
        """Return ``True`` if some path could belong to both namespaces."""
        if self.filename is not None and other.filename is not None:
            return self.filename == other.filename
        if self.filename is not None:
            return self._overlaps_fixed(other)
        if other.filename is not None:
            return other._overlaps_fixed(self)
        if not self.is_directory and not other.is_directory:
            return self.prefix == other.prefix
        if self.is_directory and other.is_directory:
            return (
                self.prefix == other.prefix
                or self.prefix in other.prefix.parents
                or other.prefix in self.prefix.parents
            )
        directory, single = (self, other) if self.is_directory else (other, self)
        return directory.contains(single.prefix)

    def _overlaps_fixed(self, fixed: "OutputNamespace") -> bool:
        # ``self`` is per-directory, ``fixed`` is a file or a directory prefix.
        if not fixed.is_directory:
            return self.contains(fixed.prefix)
        return not _has_hidden_part(fixed.prefix.parts)

    def __str__(self) -> str:
        if self.filename is not None:
            return f"<dir>/{self.filename}"
        if self.is_directory:
            return f"{self.prefix}/*"
        return str(self.prefix)


# ---------------------------------------------------------------------------
# Generator contract
# ---------------------------------------------------------------------------


class Generator(ABC):
    """Produces a ``FileSet`` from a ``GenerateContext``.

    Implementations must be deterministic and must not write to storage.
    A generator whose applicability condition is not met returns an empty
    ``FileSet``.
    """

    # When True, the Writer downgrades per-file write failures to warnings.
    best_effort: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier used in errors and console output."""

    @property
    @abstractmethod
    def namespace(self) -> OutputNamespace:
        """Paths this generator is allowed to emit."""

    @abstractmethod
    def generate(self, context: GenerateContext) -> FileSet:
        """Compute this generator's files for *context*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class TemplateGenerator(Generator):
    """A ``Generator`` whose files are rendered from Jinja2 templates."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        languages: LanguageRegistry | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.languages = languages or default_language_registry()

    def render(self, template: str, context: GenerateContext, **extra: Any) -> str:
        """Render *template* with the config sections plus *extra* variables."""
        variables = self.template_variables(context.config)
        variables.update(extra)
        return self.renderer.render(template, variables)

    def template_variables(self, config: Config) -> dict[str, Any]:
        frontend_lang = None
        frontend_framework = None
        if config.frontend is not None:
            frontend_lang = self.languages.language(config.frontend.language)
            frontend_framework = self.languages.framework(config.frontend.framework)
        backend_lang = None
        if config.backend is not None:
            backend_lang = self.languages.language(config.backend.language)
        return {
            "config": config,
            "general": config.general,
            "frontend": config.frontend,
            "backend": config.backend,
            "testing": config.testing,
            "agents": config.agents,
            "prompts": config.prompts,
            "specs": config.specs,
            "frontend_lang": frontend_lang,
            "frontend_framework": frontend_framework,
            "backend_lang": backend_lang,
            "testing_framework": self.languages.framework(config.testing.framework),
        }
