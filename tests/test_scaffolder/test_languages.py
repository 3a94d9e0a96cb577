"""Tests for the language registry (proser.scaffolder.languages)."""

from __future__ import annotations

import pytest

from proser.scaffolder.languages import (
    FrameworkInfo,
    LanguageInfo,
    LanguageRegistry,
    default_language_registry,
)


pytestmark = pytest.mark.unit


class TestLanguageRegistry:
    def test_builtin_languages(self):
        registry = default_language_registry()
        assert registry.language_names() == [
            "csharp", "go", "java", "javascript", "python", "rust", "typescript",
        ]

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("Go", "go"),
            ("golang", "go"),
            ("PY", "python"),
            ("ts", "typescript"),
            ("Node.js", "javascript"),
            ("C#", "csharp"),
            (" rust ", "rust"),
        ],
    )
    def test_lookup_by_name_or_alias(self, alias, expected):
        info = default_language_registry().language(alias)
        assert info is not None
        assert info.name == expected

    def test_unknown_language(self):
        assert default_language_registry().language("cobol") is None

    def test_apply_to_globs(self):
        registry = default_language_registry()
        assert registry.language("go").apply_to == "**/*.go"
        assert registry.language("javascript").apply_to == "**/*.{js,mjs,cjs}"

    def test_framework_lookup(self):
        registry = default_language_registry()
        assert registry.framework("React").language == "javascript"
        assert registry.framework("Go testing").guidelines
        assert registry.framework("") is None
        assert registry.framework("Svelte") is None

    def test_custom_registry(self):
        registry = LanguageRegistry()
        registry.register_language(LanguageInfo(name="zig", aliases=("ziglang",), extensions=(".zig",)))
        registry.register_framework(FrameworkInfo(name="zest", language="zig", guidelines=("Be quick",)))
        assert registry.language("ZigLang").apply_to == "**/*.zig"
        assert registry.framework("zest").guidelines == ("Be quick",)
        assert registry.language("go") is None
