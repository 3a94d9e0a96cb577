"""proser scaffolder -- generators, directory scanning and the writer.

Quick usage::

    from proser.config import Config
    from proser.scaffolder import GenerateContext, Writer, AgentsMdGenerator
    from proser.storage import OSStorage

    storage = OSStorage()
    context = GenerateContext(config=Config(), root=Path("/work/app"), storage=storage)
    Writer(storage).run_generator(AgentsMdGenerator(), context)
"""

from proser.scaffolder.agents_gen import AgentsGenerator
from proser.scaffolder.base import (
    FileSet,
    GeneratedFile,
    GenerateContext,
    Generator,
    OutputNamespace,
    TemplateGenerator,
)
from proser.scaffolder.discovery_gen import AgentMdGenerator, AgentsMdGenerator
from proser.scaffolder.instructions_gen import (
    BackendInstructionsGenerator,
    CopilotInstructionsGenerator,
    FrontendInstructionsGenerator,
    TestingInstructionsGenerator,
)
from proser.scaffolder.languages import LanguageInfo, LanguageRegistry, default_language_registry
from proser.scaffolder.prompts_gen import PromptsGenerator
from proser.scaffolder.scanner import DEFAULT_SKIP_DIRS, DirectoryScanner, SkipList
from proser.scaffolder.specs_gen import SpecsGenerator
from proser.scaffolder.templates import TemplateRenderer
from proser.scaffolder.writer import WriteReport, Writer

__all__ = [
    "AgentMdGenerator",
    "AgentsGenerator",
    "AgentsMdGenerator",
    "BackendInstructionsGenerator",
    "CopilotInstructionsGenerator",
    "DEFAULT_SKIP_DIRS",
    "DirectoryScanner",
    "FileSet",
    "FrontendInstructionsGenerator",
    "GenerateContext",
    "GeneratedFile",
    "Generator",
    "LanguageInfo",
    "LanguageRegistry",
    "OutputNamespace",
    "PromptsGenerator",
    "SkipList",
    "SpecsGenerator",
    "TemplateGenerator",
    "TemplateRenderer",
    "TestingInstructionsGenerator",
    "WriteReport",
    "Writer",
    "default_language_registry",
]
