"""Jinja2 template rendering for generated instruction files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``proser/scaffolder/templates/`` directory and renders them with a context
built from the project ``Config``.  Rendering is pure: the renderer returns
text and never touches storage, so generators stay side-effect-free.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Answers that mean "nothing chosen" for a framework-like field.
_PLACEHOLDERS = frozenset({"", "none", "vanilla"})


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for instruction files.

    The renderer loads ``.j2`` template files from a configurable template
    directory.  Templates are rendered with a context dictionary
    that typically contains the config sections and language metadata.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.tests["meaningful"] = _is_meaningful

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"agents/architect.agent.md.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom tests
# ---------------------------------------------------------------------------

def _is_meaningful(value: Any) -> bool:
    """``{% if x is meaningful %}``: true unless empty or a placeholder answer."""
    if value is None:
        return False
    return str(value).strip().lower() not in _PLACEHOLDERS
