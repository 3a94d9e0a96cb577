"""Reusable prompt workflows under ``.github/prompts/``."""

from __future__ import annotations

from .base import FileSet, GenerateContext, OutputNamespace, TemplateGenerator

PROMPTS_DIR = ".github/prompts"

# PromptsConfig flag -> prompt file stem
PROMPTS: tuple[tuple[str, str], ...] = (
    ("code_review", "code-review"),
    ("feature_spec", "feature-spec"),
    ("refactor", "refactor"),
    ("bug_fix", "bug-fix"),
    ("pr_description", "pr-description"),
)


class PromptsGenerator(TemplateGenerator):
    """Writes one ``.prompt.md`` file per enabled prompt."""

    name = "prompts"
    namespace = OutputNamespace.directory(PROMPTS_DIR)

    def generate(self, context: GenerateContext) -> FileSet:
        files = FileSet()
        if not context.config.has_prompts:
            return files

        prompts = context.config.prompts
        for flag, stem in PROMPTS:
            if getattr(prompts, flag):
                files.add(
                    f"{PROMPTS_DIR}/{stem}.prompt.md",
                    self.render(f"prompts/{stem}.prompt.md.j2", context),
                )
        return files
