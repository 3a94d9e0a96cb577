"""Language and framework metadata used to tailor generated instructions.

``LanguageRegistry`` is an explicit value: build one with
``default_language_registry()`` (or register your own entries) and hand it
to the generators that need language-aware wording.  Lookups are
case-insensitive and resolve aliases (``"ts"`` -> TypeScript).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LanguageInfo:
    """Metadata and guideline lines for a programming language."""

    name: str
    aliases: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    guidelines: tuple[str, ...] = ()
    testing_patterns: tuple[str, ...] = ()
    output_checklist: tuple[str, ...] = ()
    context_files: tuple[str, ...] = ()
    test_glob: str = ""

    @property
    def apply_to(self) -> str:
        """Glob matching this language's source files."""
        exts = [ext.lstrip(".") for ext in self.extensions]
        if len(exts) == 1:
            return f"**/*.{exts[0]}"
        return "**/*.{" + ",".join(exts) + "}"


@dataclass(frozen=True)
class FrameworkInfo:
    """Guideline lines for an application or testing framework."""

    name: str
    language: str
    guidelines: tuple[str, ...] = field(default_factory=tuple)


class LanguageRegistry:
    """Lookup table for ``LanguageInfo`` and ``FrameworkInfo`` entries."""

    def __init__(self) -> None:
        self._languages: dict[str, LanguageInfo] = {}
        self._frameworks: dict[str, FrameworkInfo] = {}

    def register_language(self, info: LanguageInfo) -> None:
        """Register *info* under its name and every alias."""
        for key in (info.name, *info.aliases):
            self._languages[key.lower()] = info

    def register_framework(self, info: FrameworkInfo) -> None:
        self._frameworks[info.name.lower()] = info

    def language(self, name: str) -> LanguageInfo | None:
        """Return the language registered as *name* (or alias), if any."""
        return self._languages.get(name.strip().lower())

    def framework(self, name: str) -> FrameworkInfo | None:
        return self._frameworks.get(name.strip().lower())

    def language_names(self) -> list[str]:
        """Return the primary names of all registered languages, sorted."""
        return sorted({info.name for info in self._languages.values()})


# ---------------------------------------------------------------------------
# Built-in entries
# ---------------------------------------------------------------------------

_LANGUAGES: tuple[LanguageInfo, ...] = (
    LanguageInfo(
        name="go",
        aliases=("golang",),
        extensions=(".go",),
        guidelines=(
            "Follow Go conventions and idioms (effective Go)",
            "Handle errors explicitly and wrap them with context",
            "Use interfaces to define behavior contracts",
            "Use context.Context for request scoping and cancellation",
        ),
        testing_patterns=(
            "Table-driven test patterns",
            "Benchmark tests for performance-critical code",
        ),
        output_checklist=(
            "Comprehensive error handling with wrapped errors",
            "Unit tests with table-driven test patterns",
        ),
        context_files=("go.mod", "main.go"),
        test_glob="**/*_test.go",
    ),
    LanguageInfo(
        name="python",
        aliases=("py",),
        extensions=(".py",),
        guidelines=(
            "Follow PEP 8 style guidelines",
            "Use type hints for function signatures",
            "Use context managers for resource management",
            "Use asyncio for asynchronous operations when appropriate",
        ),
        testing_patterns=("Pytest fixtures and parametrized cases",),
        output_checklist=(
            "Proper exception handling with specific exception types",
            "Unit tests with pytest",
        ),
        context_files=("pyproject.toml", "requirements.txt"),
        test_glob="**/test_*.py",
    ),
    LanguageInfo(
        name="java",
        extensions=(".java",),
        guidelines=(
            "Follow Java naming conventions (camelCase, PascalCase)",
            "Use try-with-resources for resource handling",
            "Follow SOLID principles",
        ),
        testing_patterns=("JUnit test classes with proper annotations",),
        output_checklist=(
            "Comprehensive exception handling with custom exceptions",
            "Unit tests with JUnit and appropriate mocking",
        ),
        context_files=("pom.xml", "build.gradle"),
        test_glob="**/test/**/*.java",
    ),
    LanguageInfo(
        name="javascript",
        aliases=("js", "node", "node.js"),
        extensions=(".js", ".mjs", ".cjs"),
        guidelines=(
            "Follow modern JavaScript best practices (ES6+)",
            "Use proper module imports/exports",
            "Use async/await for asynchronous code",
        ),
        testing_patterns=("Async/await patterns for async code",),
        output_checklist=(
            "Proper JSDoc annotations",
            "Unit tests with Jest or a similar framework",
        ),
        context_files=("package.json",),
    ),
    LanguageInfo(
        name="typescript",
        aliases=("ts",),
        extensions=(".ts", ".tsx"),
        guidelines=(
            "Follow TypeScript best practices with strict mode",
            "Use proper type definitions and interfaces",
            "Avoid the `any` type",
        ),
        testing_patterns=("Type-safe mock implementations",),
        output_checklist=(
            "Proper TypeScript type annotations",
            "Unit tests with Jest or Vitest",
        ),
        context_files=("package.json", "tsconfig.json"),
    ),
    LanguageInfo(
        name="rust",
        aliases=("rs",),
        extensions=(".rs",),
        guidelines=(
            "Leverage the ownership system instead of cloning",
            "Use Result and Option for error handling",
            "Format with rustfmt",
        ),
        testing_patterns=("Unit tests with #[test] and integration tests in tests/",),
        output_checklist=(
            "Proper error handling with Result and Option types",
            "Unit tests and documentation tests",
        ),
        context_files=("Cargo.toml",),
    ),
    LanguageInfo(
        name="csharp",
        aliases=("c#", "cs"),
        extensions=(".cs",),
        guidelines=(
            "Follow .NET naming conventions (PascalCase)",
            "Use async/await for asynchronous operations",
            "Use dependency injection",
        ),
        testing_patterns=("Unit tests with xUnit or NUnit",),
        output_checklist=(
            "Proper exception handling",
            "XML documentation comments for public APIs",
        ),
        context_files=("*.csproj", "*.sln"),
    ),
)

_FRAMEWORKS: tuple[FrameworkInfo, ...] = (
    FrameworkInfo(
        name="react",
        language="javascript",
        guidelines=(
            "Prefer functional components with hooks over class components",
            "Follow the rules of hooks",
            "Use React.memo() for performance optimization when needed",
        ),
    ),
    FrameworkInfo(
        name="vue",
        language="javascript",
        guidelines=(
            "Use the Composition API when possible",
            "Follow single-file component structure",
            "Validate props",
        ),
    ),
    FrameworkInfo(
        name="angular",
        language="typescript",
        guidelines=(
            "Follow the Angular style guide",
            "Use dependency injection for services",
            "Use RxJS observables for async operations",
        ),
    ),
    FrameworkInfo(
        name="jest",
        language="javascript",
        guidelines=(
            "Use `describe`/`it` blocks for organization",
            "Use `beforeEach`/`afterEach` for setup and teardown",
        ),
    ),
    FrameworkInfo(
        name="pytest",
        language="python",
        guidelines=(
            "Use pytest fixtures for setup and teardown",
            "Use `@pytest.mark.parametrize` for data-driven tests",
        ),
    ),
    FrameworkInfo(
        name="junit",
        language="java",
        guidelines=(
            "Use JUnit 5 annotations (`@BeforeEach`, `@ParameterizedTest`)",
            "Use Mockito for mocking dependencies",
        ),
    ),
    FrameworkInfo(
        name="go testing",
        language="go",
        guidelines=(
            "Use table-driven tests for multiple scenarios",
            "Use subtests with t.Run() for organization",
        ),
    ),
)


def default_language_registry() -> LanguageRegistry:
    """Return a registry pre-populated with the built-in entries."""
    registry = LanguageRegistry()
    for language in _LANGUAGES:
        registry.register_language(language)
    for framework in _FRAMEWORKS:
        registry.register_framework(framework)
    return registry
