"""Instruction file generators under ``.github/``.

One global ``copilot-instructions.md`` plus scoped instruction files for
the frontend, backend and testing concerns.  The frontend and backend files
are only emitted when the matching ``Config`` section is present.
"""

from __future__ import annotations

from .base import FileSet, GenerateContext, OutputNamespace, TemplateGenerator

COPILOT_INSTRUCTIONS_PATH = ".github/copilot-instructions.md"
FRONTEND_INSTRUCTIONS_PATH = ".github/instructions/frontend.instructions.md"
BACKEND_INSTRUCTIONS_PATH = ".github/instructions/backend.instructions.md"
TESTING_INSTRUCTIONS_PATH = ".github/instructions/testing.instructions.md"


class CopilotInstructionsGenerator(TemplateGenerator):
    """Writes the repository-wide instructions file."""

    name = "copilot-instructions"
    namespace = OutputNamespace.file(COPILOT_INSTRUCTIONS_PATH)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        files.add(
            COPILOT_INSTRUCTIONS_PATH,
            self.render("instructions/copilot.md.j2", context),
        )
        return files


class FrontendInstructionsGenerator(TemplateGenerator):
    """Writes frontend guidelines when the project has a frontend."""

    name = "frontend-instructions"
    namespace = OutputNamespace.file(FRONTEND_INSTRUCTIONS_PATH)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        if not context.config.has_frontend:
            return files
        files.add(
            FRONTEND_INSTRUCTIONS_PATH,
            self.render("instructions/frontend.md.j2", context),
        )
        return files


class BackendInstructionsGenerator(TemplateGenerator):
    """Writes backend guidelines when the project has a backend."""

    name = "backend-instructions"
    namespace = OutputNamespace.file(BACKEND_INSTRUCTIONS_PATH)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        if not context.config.has_backend:
            return files
        files.add(
            BACKEND_INSTRUCTIONS_PATH,
            self.render("instructions/backend.md.j2", context),
        )
        return files


class TestingInstructionsGenerator(TemplateGenerator):
    """Writes testing guidelines.  Always emitted."""

    __test__ = False  # not a pytest class

    name = "testing-instructions"
    namespace = OutputNamespace.file(TESTING_INSTRUCTIONS_PATH)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        files.add(
            TESTING_INSTRUCTIONS_PATH,
            self.render("instructions/testing.md.j2", context),
        )
        return files
