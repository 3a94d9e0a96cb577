"""Shared pytest fixtures for the proser test suite.

Provides reusable fixtures for:
- In-memory and real-filesystem storage
- Answer mappings and the configs built from them
- Generate contexts rooted in memory or in ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path

import pytest

from proser.config import BackendConfig, Config, GeneralConfig, TestingConfig
from proser.scaffolder.base import GenerateContext
from proser.storage import MemoryStorage, OSStorage

MEMORY_ROOT = Path("/project")


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Fresh in-memory storage with the project root already created."""
    storage = MemoryStorage()
    storage.make_directory_tree(MEMORY_ROOT)
    return storage


@pytest.fixture
def os_storage() -> OSStorage:
    return OSStorage()


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated projects (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Answers & configs
# ---------------------------------------------------------------------------


@pytest.fixture
def fullstack_answers() -> dict[str, str]:
    """Every answer a fullstack run would collect, all toggles on."""
    answers = {
        "project_name": "shop",
        "description": "An online shop",
        "code_style": "Use black and prettier",
        "security": "Follow OWASP top 10",
        "custom_rules": "None",
        "frontend_language": "TypeScript",
        "frontend_framework": "React",
        "frontend_build_tool": "Vite",
        "backend_language": "Python",
        "backend_framework": "FastAPI",
        "backend_database": "PostgreSQL",
        "api_rules": "RESTful API design",
        "testing_framework": "pytest",
        "testing_strategy": "Unit and Integration tests",
        "enable_agents": "yes",
        "enable_prompts": "yes",
        "enable_specs": "yes",
    }
    for key in (
        "agent_architect", "agent_frontend", "agent_backend", "agent_code_reviewer",
        "agent_technical_writer", "agent_devops", "agent_tester",
        "prompt_code_review", "prompt_feature_spec", "prompt_refactor",
        "prompt_bug_fix", "prompt_pr_description",
        "spec_feature_template", "spec_api_endpoint", "spec_component",
    ):
        answers[key] = "yes"
    return answers


@pytest.fixture
def fullstack_config(fullstack_answers: dict[str, str]) -> Config:
    return Config.from_answers(fullstack_answers)


@pytest.fixture
def backend_only_config() -> Config:
    """A Go backend with no frontend section."""
    return Config(
        general=GeneralConfig(
            project_name="inventory-api",
            description="Inventory service",
            code_style="Use gofmt",
            security="Validate all input",
        ),
        backend=BackendConfig(
            language="Go",
            framework="Gin",
            database="PostgreSQL",
            api_rules="RESTful API design",
        ),
        testing=TestingConfig(framework="Go testing", strategy="Table-driven unit tests"),
    )


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_context(memory_storage: MemoryStorage, fullstack_config: Config) -> GenerateContext:
    return GenerateContext(config=fullstack_config, root=MEMORY_ROOT, storage=memory_storage)


@pytest.fixture
def make_context(memory_storage: MemoryStorage):
    """Factory: ``make_context(config)`` -> context over ``memory_storage``."""

    def _make(config: Config, root: Path = MEMORY_ROOT) -> GenerateContext:
        return GenerateContext(config=config, root=root, storage=memory_storage)

    return _make
