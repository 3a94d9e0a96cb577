"""Project types: which generators run and which questions are asked.

A ``ProjectType`` is an ordered list of generators plus the questions whose
answers feed ``Config.from_answers``.  Building one checks that no two of
its generators can write the same path.  ``ProjectTypeRegistry`` is an
explicit lookup value; ``default_registry()`` builds the three stock types
(``fullstack``, ``frontend``, ``backend``).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from rich.markup import escape
from rich.prompt import Prompt

from proser.config import DEFAULT_PROJECT_TYPE, DEFAULT_SCAN_DEPTH
from proser.errors import NamespaceConflictError, ProjectTypeNotFoundError
from proser.scaffolder.agents_gen import AgentsGenerator
from proser.scaffolder.base import Generator
from proser.scaffolder.discovery_gen import AgentMdGenerator, AgentsMdGenerator
from proser.scaffolder.instructions_gen import (
    BackendInstructionsGenerator,
    CopilotInstructionsGenerator,
    FrontendInstructionsGenerator,
    TestingInstructionsGenerator,
)
from proser.scaffolder.languages import LanguageRegistry, default_language_registry
from proser.scaffolder.prompts_gen import PromptsGenerator
from proser.scaffolder.scanner import SkipList
from proser.scaffolder.specs_gen import SpecsGenerator
from proser.scaffolder.templates import TemplateRenderer
from proser.utils import console


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Question:
    """One configuration question; ``key`` matches a ``Config.from_answers`` key.

    ``requires`` names an earlier question whose empty answer makes this one
    moot: it is then answered with ``""`` without asking.
    """

    key: str
    prompt: str
    default: str = ""
    requires: str | None = None


def general_questions() -> list[Question]:
    return [
        Question("project_name", "Project name", "my-project"),
        Question("description", "Project description", "A software project"),
        Question(
            "code_style",
            "General code style guidelines (e.g., follow PEP8, use gofmt, ESLint rules)",
            "Follow standard formatting",
        ),
        Question(
            "security",
            "Security requirements (e.g., authentication methods, data encryption, OWASP compliance)",
            "Follow OWASP top 10",
        ),
        Question("custom_rules", "Additional custom rules or guidelines", "None"),
    ]


def frontend_questions() -> list[Question]:
    return [
        Question(
            "frontend_language",
            "Frontend language (e.g., JavaScript, TypeScript, or 'skip' if no frontend)",
            "JavaScript",
        ),
        Question(
            "frontend_framework",
            "Frontend framework (e.g., React, Vue, Angular, Vanilla)",
            "React",
            requires="frontend_language",
        ),
        Question(
            "frontend_build_tool",
            "Frontend build tool (e.g., Webpack, Vite, Parcel)",
            "Vite",
            requires="frontend_language",
        ),
    ]


def backend_questions() -> list[Question]:
    return [
        Question(
            "backend_language",
            "Backend language (e.g., Go, Python, Java, Node.js, or 'skip' if no backend)",
            "Go",
        ),
        Question(
            "backend_framework",
            "Backend framework (e.g., Express, Flask, Spring, Gin, FastAPI)",
            "None",
            requires="backend_language",
        ),
        Question(
            "backend_database",
            "Primary database (e.g., PostgreSQL, MongoDB, MySQL, SQLite)",
            "PostgreSQL",
            requires="backend_language",
        ),
        Question(
            "api_rules",
            "API design rules (e.g., RESTful, GraphQL standards, versioning strategy)",
            "RESTful API design",
            requires="backend_language",
        ),
    ]


def testing_questions() -> list[Question]:
    return [
        Question(
            "testing_framework",
            "Primary testing framework (e.g., Jest, pytest, JUnit, Go testing)",
            "Jest",
        ),
        Question(
            "testing_strategy",
            "Testing strategy focus (e.g., Unit tests, Integration tests, E2E, TDD)",
            "Unit and Integration tests",
        ),
    ]


def toggle_questions() -> list[Question]:
    """Yes/no questions selecting agents, prompts and specs.

    Roles and templates that need a missing frontend or backend are
    dropped by their generators, so the same defaults suit every type.
    """
    return [
        Question("enable_agents", "Generate agent role definitions? (yes/no)", "yes"),
        Question("agent_architect", "  Architect agent? (yes/no)", "yes"),
        Question("agent_frontend", "  Frontend engineer agent? (yes/no)", "yes"),
        Question("agent_backend", "  Backend engineer agent? (yes/no)", "yes"),
        Question("agent_code_reviewer", "  Code reviewer agent? (yes/no)", "yes"),
        Question("agent_technical_writer", "  Technical writer agent? (yes/no)", "yes"),
        Question("agent_devops", "  DevOps engineer agent? (yes/no)", "no"),
        Question("agent_tester", "  Tester agent? (yes/no)", "yes"),
        Question("enable_prompts", "Generate prompt workflows? (yes/no)", "yes"),
        Question("prompt_code_review", "  Code review prompt? (yes/no)", "yes"),
        Question("prompt_feature_spec", "  Feature spec prompt? (yes/no)", "yes"),
        Question("prompt_refactor", "  Refactor prompt? (yes/no)", "yes"),
        Question("prompt_bug_fix", "  Bug fix prompt? (yes/no)", "yes"),
        Question("prompt_pr_description", "  PR description prompt? (yes/no)", "yes"),
        Question("enable_specs", "Generate specification templates? (yes/no)", "yes"),
        Question("spec_feature_template", "  Feature template? (yes/no)", "yes"),
        Question("spec_api_endpoint", "  API endpoint template? (yes/no)", "yes"),
        Question("spec_component", "  Component template? (yes/no)", "yes"),
    ]


def collect_answers(
    questions: Sequence[Question],
    interactive: bool = True,
    preset: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Answer every question, asking on the console when *interactive*.

    Keys already present in *preset* are taken as-is and not asked.  An
    empty reply keeps the default; ``skip`` yields an empty answer.
    Non-interactive runs use the defaults.  Once a section's language is
    skipped, its follow-up questions are answered ``""`` without asking.
    """
    answers: dict[str, str] = dict(preset or {})
    for question in questions:
        if question.key in answers:
            continue
        if question.requires and not _answered(answers, question.requires):
            answers[question.key] = ""
            continue
        if not interactive:
            answers[question.key] = question.default
            continue
        reply = Prompt.ask(
            f"{escape(question.prompt)} [dim](type 'skip' to omit)[/dim]",
            default=question.default,
            console=console,
        )
        reply = (reply or "").strip()
        answers[question.key] = "" if reply.lower() == "skip" else reply
    return answers


def _answered(answers: Mapping[str, str], key: str) -> bool:
    value = answers.get(key, "").strip()
    return bool(value) and value.lower() != "skip"


# ---------------------------------------------------------------------------
# Project types
# ---------------------------------------------------------------------------


class ProjectType:
    """A named, ordered bundle of generators and questions.

    Raises:
        NamespaceConflictError: If two generators own overlapping outputs.
    """

    def __init__(
        self,
        name: str,
        description: str,
        generators: Sequence[Generator],
        questions: Sequence[Question] = (),
    ) -> None:
        self.name = name
        self.description = description
        self.generators: tuple[Generator, ...] = tuple(generators)
        self.questions: tuple[Question, ...] = tuple(questions)
        self._check_namespaces()

    def _check_namespaces(self) -> None:
        for index, first in enumerate(self.generators):
            for second in self.generators[index + 1:]:
                if first.namespace.overlaps(second.namespace):
                    raise NamespaceConflictError(
                        first.name,
                        second.name,
                        f"{first.namespace} vs {second.namespace}",
                    )

    def generator_names(self) -> list[str]:
        return [generator.name for generator in self.generators]

    def __repr__(self) -> str:
        return f"ProjectType({self.name!r}, generators={self.generator_names()!r})"


class ProjectTypeRegistry:
    """Explicit name -> ``ProjectType`` table with a fallback default."""

    def __init__(self, default: str = DEFAULT_PROJECT_TYPE) -> None:
        self.default = default
        self._types: dict[str, ProjectType] = {}

    def register(self, project_type: ProjectType) -> None:
        if project_type.name in self._types:
            raise ValueError(f"Project type already registered: {project_type.name!r}")
        self._types[project_type.name] = project_type

    def get(self, name: str) -> ProjectType:
        try:
            return self._types[name]
        except KeyError:
            raise ProjectTypeNotFoundError(name) from None

    def get_or_default(self, name: str | None) -> ProjectType:
        """Return *name* if registered, otherwise the default type."""
        if name and name in self._types:
            return self._types[name]
        return self.get(self.default)

    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[ProjectType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


def default_registry(
    max_depth: int = DEFAULT_SCAN_DEPTH,
    skip_list: SkipList | None = None,
    renderer: TemplateRenderer | None = None,
    languages: LanguageRegistry | None = None,
) -> ProjectTypeRegistry:
    """Build the stock ``fullstack``, ``frontend`` and ``backend`` types."""
    renderer = renderer or TemplateRenderer()
    languages = languages or default_language_registry()
    shared = {"renderer": renderer, "languages": languages}

    def agent_md() -> AgentMdGenerator:
        return AgentMdGenerator(max_depth=max_depth, skip_list=skip_list, **shared)

    registry = ProjectTypeRegistry()
    registry.register(
        ProjectType(
            name="fullstack",
            description="Full-stack application with frontend and backend",
            generators=[
                CopilotInstructionsGenerator(**shared),
                FrontendInstructionsGenerator(**shared),
                BackendInstructionsGenerator(**shared),
                TestingInstructionsGenerator(**shared),
                AgentsGenerator(**shared),
                PromptsGenerator(**shared),
                SpecsGenerator(**shared),
                AgentsMdGenerator(**shared),
                agent_md(),
            ],
            questions=general_questions()
            + frontend_questions()
            + backend_questions()
            + testing_questions()
            + toggle_questions(),
        )
    )
    registry.register(
        ProjectType(
            name="frontend",
            description="Frontend application only",
            generators=[
                CopilotInstructionsGenerator(**shared),
                FrontendInstructionsGenerator(**shared),
                TestingInstructionsGenerator(**shared),
                AgentsGenerator(**shared),
                PromptsGenerator(**shared),
                SpecsGenerator(**shared),
                AgentsMdGenerator(**shared),
                agent_md(),
            ],
            questions=general_questions()
            + frontend_questions()
            + testing_questions()
            + toggle_questions(),
        )
    )
    registry.register(
        ProjectType(
            name="backend",
            description="Backend/API service only",
            generators=[
                CopilotInstructionsGenerator(**shared),
                BackendInstructionsGenerator(**shared),
                TestingInstructionsGenerator(**shared),
                AgentsGenerator(**shared),
                PromptsGenerator(**shared),
                SpecsGenerator(**shared),
                AgentsMdGenerator(**shared),
                agent_md(),
            ],
            questions=general_questions()
            + backend_questions()
            + testing_questions()
            + toggle_questions(),
        )
    )
    return registry
