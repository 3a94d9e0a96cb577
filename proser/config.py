"""proser configuration.

Two families of typed models live here:

* ``Config`` -- the immutable snapshot of project facts that every generator
  reads (general conventions, optional frontend/backend sections, testing
  and optional feature toggles).
* ``Settings`` -- knobs for the tool itself (project type, scan depth,
  interactivity), readable from environment variables.

All models use Pydantic v2 so they validate at construction time and
serialise to/from JSON without boiler-plate.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCAN_DEPTH = 3
DEFAULT_PROJECT_TYPE = "fullstack"

_AFFIRMATIVE = frozenset({"yes", "y", "true", "1"})


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Project sections
# ---------------------------------------------------------------------------


class GeneralConfig(_Section):
    """Project-wide facts and free-text conventions."""

    project_name: str = Field(default="")
    description: str = Field(default="")
    code_style: str = Field(default="")
    security: str = Field(default="")
    custom_rules: str = Field(default="")


class FrontendConfig(_Section):
    """Frontend stack.  Present only when the project has a frontend."""

    language: str = Field(..., description="e.g. TypeScript, JavaScript")
    framework: str = Field(default="", description="e.g. React, Vue, Angular, Vanilla")
    build_tool: str = Field(default="", description="e.g. Vite, Webpack")


class BackendConfig(_Section):
    """Backend stack.  Present only when the project has a backend."""

    language: str = Field(..., description="e.g. Go, Python, Java")
    framework: str = Field(default="", description="e.g. Gin, FastAPI, Spring")
    database: str = Field(default="", description="e.g. PostgreSQL, MongoDB")
    api_rules: str = Field(default="")


class TestingConfig(_Section):
    """Testing conventions.  Always present; fields may be empty."""

    __test__ = False  # not a pytest class

    framework: str = Field(default="")
    strategy: str = Field(default="")


class AgentsConfig(_Section):
    """Which agent role definitions to emit."""

    architect: bool = False
    frontend: bool = False
    backend: bool = False
    code_reviewer: bool = False
    technical_writer: bool = False
    devops: bool = False
    tester: bool = False


class PromptsConfig(_Section):
    """Which prompt templates to emit."""

    code_review: bool = False
    feature_spec: bool = False
    refactor: bool = False
    bug_fix: bool = False
    pr_description: bool = False


class SpecsConfig(_Section):
    """Which specification templates to emit."""

    feature_template: bool = False
    api_endpoint: bool = False
    component: bool = False


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class Config(_Section):
    """Immutable description of the project being scaffolded.

    Optional sections are either a fully-populated model or ``None``; an
    absent section is never represented by empty strings.  Generators use
    the ``has_*`` properties to decide whether a concern applies.
    """

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    frontend: FrontendConfig | None = None
    backend: BackendConfig | None = None
    testing: TestingConfig = Field(default_factory=TestingConfig)
    agents: AgentsConfig | None = None
    prompts: PromptsConfig | None = None
    specs: SpecsConfig | None = None

    @property
    def has_frontend(self) -> bool:
        return self.frontend is not None

    @property
    def has_backend(self) -> bool:
        return self.backend is not None

    @property
    def has_agents(self) -> bool:
        return self.agents is not None

    @property
    def has_prompts(self) -> bool:
        return self.prompts is not None

    @property
    def has_specs(self) -> bool:
        return self.specs is not None

    # ------------------------------------------------------------------
    # Construction from answers
    # ------------------------------------------------------------------

    @classmethod
    def from_answers(cls, answers: Mapping[str, str]) -> "Config":
        """Build a ``Config`` from a flat mapping of question answers.

        A frontend or backend language that is empty or ``"skip"`` leaves
        that section absent.  Toggle sections exist only when their
        ``enable_*`` answer is affirmative.
        """

        def get(key: str) -> str:
            return str(answers.get(key, "") or "")

        frontend = None
        if _is_present(get("frontend_language")):
            frontend = FrontendConfig(
                language=get("frontend_language"),
                framework=get("frontend_framework"),
                build_tool=get("frontend_build_tool"),
            )

        backend = None
        if _is_present(get("backend_language")):
            backend = BackendConfig(
                language=get("backend_language"),
                framework=get("backend_framework"),
                database=get("backend_database"),
                api_rules=get("api_rules"),
            )

        agents = None
        if _is_affirmative(get("enable_agents")):
            agents = AgentsConfig(
                architect=_is_affirmative(get("agent_architect")),
                frontend=_is_affirmative(get("agent_frontend")),
                backend=_is_affirmative(get("agent_backend")),
                code_reviewer=_is_affirmative(get("agent_code_reviewer")),
                technical_writer=_is_affirmative(get("agent_technical_writer")),
                devops=_is_affirmative(get("agent_devops")),
                tester=_is_affirmative(get("agent_tester")),
            )

        prompts = None
        if _is_affirmative(get("enable_prompts")):
            prompts = PromptsConfig(
                code_review=_is_affirmative(get("prompt_code_review")),
                feature_spec=_is_affirmative(get("prompt_feature_spec")),
                refactor=_is_affirmative(get("prompt_refactor")),
                bug_fix=_is_affirmative(get("prompt_bug_fix")),
                pr_description=_is_affirmative(get("prompt_pr_description")),
            )

        specs = None
        if _is_affirmative(get("enable_specs")):
            specs = SpecsConfig(
                feature_template=_is_affirmative(get("spec_feature_template")),
                api_endpoint=_is_affirmative(get("spec_api_endpoint")),
                component=_is_affirmative(get("spec_component")),
            )

        return cls(
            general=GeneralConfig(
                project_name=get("project_name"),
                description=get("description"),
                code_style=get("code_style"),
                security=get("security"),
                custom_rules=get("custom_rules"),
            ),
            frontend=frontend,
            backend=backend,
            testing=TestingConfig(
                framework=get("testing_framework"),
                strategy=get("testing_strategy"),
            ),
            agents=agents,
            prompts=prompts,
            specs=specs,
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Settings for a proser run (not facts about the project)."""

    project_type: str = Field(default=DEFAULT_PROJECT_TYPE)
    max_depth: int = Field(
        default=DEFAULT_SCAN_DEPTH, ge=1, description="Deepest directory level that receives AGENT.md"
    )
    non_interactive: bool = Field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            PROSER_PROJECT_TYPE, PROSER_MAX_DEPTH, PROSER_NON_INTERACTIVE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PROSER_PROJECT_TYPE"):
            kwargs["project_type"] = os.environ["PROSER_PROJECT_TYPE"]
        if os.environ.get("PROSER_MAX_DEPTH"):
            kwargs["max_depth"] = int(os.environ["PROSER_MAX_DEPTH"])
        if os.environ.get("PROSER_NON_INTERACTIVE"):
            kwargs["non_interactive"] = _is_affirmative(os.environ["PROSER_NON_INTERACTIVE"])
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Answers files
# ---------------------------------------------------------------------------


def load_answers(path: str | Path) -> dict[str, str]:
    """Load a flat answers mapping from a YAML or JSON file.

    Booleans are normalised to ``"yes"``/``"no"`` and ``None`` to ``""`` so
    the result can be fed straight into ``Config.from_answers``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must contain a mapping: {file_path}")
    return {str(key): _answer_text(value) for key, value in data.items()}


def _answer_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _is_present(value: str) -> bool:
    stripped = value.strip()
    return bool(stripped) and stripped.lower() != "skip"


def _is_affirmative(value: str) -> bool:
    return value.strip().lower() in _AFFIRMATIVE
