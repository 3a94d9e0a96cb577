"""Specification templates under ``.github/specs/``.

The API endpoint template needs a backend and the component template
needs a frontend; both are silently omitted otherwise.
"""

from __future__ import annotations

from .base import FileSet, GenerateContext, OutputNamespace, TemplateGenerator

SPECS_DIR = ".github/specs"

# (SpecsConfig flag, spec file stem, required stack section or None)
SPEC_TEMPLATES: tuple[tuple[str, str, str | None], ...] = (
    ("feature_template", "feature-template", None),
    ("api_endpoint", "api-endpoint", "backend"),
    ("component", "component", "frontend"),
)


class SpecsGenerator(TemplateGenerator):
    name = "specs"
    namespace = OutputNamespace.directory(SPECS_DIR)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        config = context.config
        if not config.has_specs:
            return files

        for flag, stem, requires in SPEC_TEMPLATES:
            if not getattr(config.specs, flag):
                continue
            if requires is not None and not getattr(config, f"has_{requires}"):
                continue
            files.add(
                f"{SPECS_DIR}/{stem}.spec.md",
                self.render(f"specs/{stem}.spec.md.j2", context),
            )
        return files
