"""Discovery files: the root ``AGENTS.md`` and per-directory ``AGENT.md``.

``AgentsMdGenerator`` writes a single project overview at the target root.
``AgentMdGenerator`` asks the ``DirectoryScanner`` which directories exist
(up to ``max_depth`` levels, hidden and skip-listed trees excluded) and
emits one ``AGENT.md`` per directory.  It is the only generator that reads
storage, and its write failures are reported as warnings.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from proser.config import DEFAULT_SCAN_DEPTH
from proser.storage.base import normalize

from .base import FileSet, GenerateContext, OutputNamespace, TemplateGenerator
from .languages import LanguageRegistry
from .scanner import DirectoryScanner, SkipList
from .templates import TemplateRenderer

AGENTS_MD_PATH = "AGENTS.md"
AGENT_MD_NAME = "AGENT.md"


class AgentsMdGenerator(TemplateGenerator):
    """Writes the root-level ``AGENTS.md``."""

    name = "agents-md"
    namespace = OutputNamespace.file(AGENTS_MD_PATH)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        files.add(AGENTS_MD_PATH, self.render("discovery/AGENTS.md.j2", context))
        return files


class AgentMdGenerator(TemplateGenerator):
    """Writes ``<dir>/AGENT.md`` for every directory the scanner yields."""

    name = "agent-md"
    namespace = OutputNamespace.per_directory(AGENT_MD_NAME)
    best_effort = True

    def __init__(
        self,
        max_depth: int = DEFAULT_SCAN_DEPTH,
        skip_list: SkipList | None = None,
        renderer: TemplateRenderer | None = None,
        languages: LanguageRegistry | None = None,
    ) -> None:
        super().__init__(renderer=renderer, languages=languages)
        self.max_depth = max_depth
        self.skip_list = skip_list if skip_list is not None else SkipList.default()

    def generate(self, context: GenerateContext) -> FileSet:
        root = normalize(context.root)
        scanner = DirectoryScanner(context.storage, self.max_depth, self.skip_list)

        files = FileSet()
        for directory in scanner.scan(root):
            rel = PurePosixPath(*directory.relative_to(root).parts)
            files.add(
                rel / AGENT_MD_NAME,
                self.render(
                    "discovery/AGENT.md.j2",
                    context,
                    directory_name=_printable(directory.name),
                    relative_path=_printable(rel.as_posix()),
                ),
            )
        return files


def _printable(text: str) -> str:
    """Replace undecodable bytes in a file-system name with U+FFFD.

    Names that are not valid UTF-8 reach Python as surrogate escapes, which
    cannot be encoded into the generated file's UTF-8 content.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
