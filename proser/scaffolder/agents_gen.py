"""Agent role definitions under ``.github/agents/``.

Each enabled role in ``Config.agents`` becomes one ``<role>.agent.md``
file.  The frontend and backend engineer roles additionally need the
matching stack section.
"""

from __future__ import annotations

from .base import FileSet, GenerateContext, OutputNamespace, TemplateGenerator

AGENTS_DIR = ".github/agents"

# (AgentsConfig flag, role file stem, required stack section or None)
AGENT_ROLES: tuple[tuple[str, str, str | None], ...] = (
    ("architect", "architect", None),
    ("frontend", "frontend-engineer", "frontend"),
    ("backend", "backend-engineer", "backend"),
    ("code_reviewer", "code-reviewer", None),
    ("technical_writer", "technical-writer", None),
    ("devops", "devops-engineer", None),
    ("tester", "tester", None),
)


class AgentsGenerator(TemplateGenerator):
    """Writes one agent file per enabled role."""

    name = "agents"
    namespace = OutputNamespace.directory(AGENTS_DIR)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        config = context.config
        if not config.has_agents:
            return files

        for flag, role, requires in AGENT_ROLES:
            if not getattr(config.agents, flag):
                continue
            if requires is not None and not getattr(config, f"has_{requires}"):
                continue
            files.add(
                f"{AGENTS_DIR}/{role}.agent.md",
                self.render(f"agents/{role}.agent.md.j2", context),
            )
        return files
