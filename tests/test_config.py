"""Unit tests for Config, Settings and answers loading (proser.config).

Tests cover:
- Config.from_answers section presence rules ("skip", empty, toggles)
- Affirmative answer parsing
- Config immutability and save/load round trip
- Settings defaults, from_env and validation
- load_answers for YAML and JSON files
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from proser.config import (
    DEFAULT_PROJECT_TYPE,
    DEFAULT_SCAN_DEPTH,
    BackendConfig,
    Config,
    Settings,
    TestingConfig,
    load_answers,
)


# ---------------------------------------------------------------------------
# Config.from_answers
# ---------------------------------------------------------------------------


class TestFromAnswers:
    @pytest.mark.unit
    def test_full_answers_populate_every_section(self, fullstack_answers):
        config = Config.from_answers(fullstack_answers)
        assert config.general.project_name == "shop"
        assert config.frontend is not None
        assert config.frontend.framework == "React"
        assert config.backend is not None
        assert config.backend.language == "Python"
        assert config.backend.api_rules == "RESTful API design"
        assert config.testing.framework == "pytest"
        assert config.has_agents and config.agents.devops
        assert config.has_prompts and config.prompts.pr_description
        assert config.has_specs and config.specs.component

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "skip", "SKIP", "  Skip  "])
    def test_skipped_frontend_language_leaves_section_absent(self, fullstack_answers, value):
        fullstack_answers["frontend_language"] = value
        config = Config.from_answers(fullstack_answers)
        assert config.frontend is None
        assert not config.has_frontend
        assert config.has_backend

    @pytest.mark.unit
    def test_missing_backend_language_leaves_section_absent(self):
        config = Config.from_answers({"project_name": "x", "frontend_language": "JavaScript"})
        assert config.backend is None
        assert config.frontend is not None
        assert config.frontend.language == "JavaScript"

    @pytest.mark.unit
    def test_empty_answers_give_defaults(self):
        config = Config.from_answers({})
        assert config.general.project_name == ""
        assert config.frontend is None
        assert config.backend is None
        assert config.testing == TestingConfig()
        assert config.agents is None
        assert config.prompts is None
        assert config.specs is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["yes", "Y", "true", "1", " YES "])
    def test_affirmative_toggle_values(self, value):
        config = Config.from_answers({"enable_agents": value, "agent_tester": value})
        assert config.agents is not None
        assert config.agents.tester is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["no", "", "nope", "0", "false"])
    def test_non_affirmative_disables_section(self, value):
        config = Config.from_answers({"enable_prompts": value, "prompt_refactor": "yes"})
        assert config.prompts is None

    @pytest.mark.unit
    def test_enabled_section_with_no_items(self):
        config = Config.from_answers({"enable_specs": "yes"})
        assert config.specs is not None
        assert not any(config.specs.model_dump().values())


# ---------------------------------------------------------------------------
# Config model behaviour
# ---------------------------------------------------------------------------


class TestConfigModel:
    @pytest.mark.unit
    def test_config_is_frozen(self, fullstack_config):
        with pytest.raises(ValidationError):
            fullstack_config.general = fullstack_config.general

    @pytest.mark.unit
    def test_testing_section_is_not_collected(self):
        assert TestingConfig.__test__ is False
        assert set(TestingConfig.model_fields) == {"framework", "strategy"}

    @pytest.mark.unit
    def test_backend_requires_language(self):
        with pytest.raises(ValidationError):
            BackendConfig()

    @pytest.mark.unit
    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Config(general={"project_name": "x", "colour": "blue"})

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path, fullstack_config):
        saved = fullstack_config.save(tmp_path / "nested" / "config.json")
        assert saved.exists()
        data = json.loads(saved.read_text(encoding="utf-8"))
        assert data["frontend"]["language"] == "TypeScript"

        loaded = Config.load(saved)
        assert loaded == fullstack_config

    @pytest.mark.unit
    def test_save_and_load_absent_sections(self, tmp_path: Path, backend_only_config):
        path = backend_only_config.save(tmp_path / "config.json")
        loaded = Config.load(path)
        assert loaded.frontend is None
        assert loaded.backend.framework == "Gin"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings()
        assert settings.project_type == DEFAULT_PROJECT_TYPE == "fullstack"
        assert settings.max_depth == DEFAULT_SCAN_DEPTH == 3
        assert settings.non_interactive is False

    @pytest.mark.unit
    def test_max_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(max_depth=0)

    @pytest.mark.unit
    def test_from_env(self):
        env = {
            "PROSER_PROJECT_TYPE": "backend",
            "PROSER_MAX_DEPTH": "5",
            "PROSER_NON_INTERACTIVE": "yes",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings.from_env()
        assert settings.project_type == "backend"
        assert settings.max_depth == 5
        assert settings.non_interactive is True

    @pytest.mark.unit
    def test_from_env_without_variables(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()

    @pytest.mark.unit
    def test_from_env_rejects_bad_depth(self):
        with patch.dict("os.environ", {"PROSER_MAX_DEPTH": "deep"}, clear=True):
            with pytest.raises(ValueError):
                Settings.from_env()


# ---------------------------------------------------------------------------
# load_answers
# ---------------------------------------------------------------------------


class TestLoadAnswers:
    @pytest.mark.unit
    def test_yaml_answers(self, tmp_path: Path):
        path = tmp_path / "answers.yaml"
        path.write_text(
            "project_name: demo\n"
            "backend_language: Go\n"
            "enable_agents: true\n"
            "agent_devops: false\n"
            "custom_rules:\n"
            "max_items: 3\n",
            encoding="utf-8",
        )
        answers = load_answers(path)
        assert answers == {
            "project_name": "demo",
            "backend_language": "Go",
            "enable_agents": "yes",
            "agent_devops": "no",
            "custom_rules": "",
            "max_items": "3",
        }

    @pytest.mark.unit
    def test_json_answers(self, tmp_path: Path):
        path = tmp_path / "answers.json"
        path.write_text(json.dumps({"project_name": "demo", "enable_specs": True}), encoding="utf-8")
        answers = load_answers(path)
        assert answers == {"project_name": "demo", "enable_specs": "yes"}

    @pytest.mark.unit
    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path):
        path = tmp_path / "answers.yml"
        path.write_text("", encoding="utf-8")
        assert load_answers(path) == {}

    @pytest.mark.unit
    def test_non_mapping_rejected(self, tmp_path: Path):
        path = tmp_path / "answers.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_answers(path)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_answers(tmp_path / "nope.yaml")

    @pytest.mark.unit
    def test_loaded_answers_feed_config(self, tmp_path: Path):
        path = tmp_path / "answers.yaml"
        path.write_text("frontend_language: skip\nbackend_language: Go\n", encoding="utf-8")
        config = Config.from_answers(load_answers(path))
        assert config.frontend is None
        assert config.backend.language == "Go"
