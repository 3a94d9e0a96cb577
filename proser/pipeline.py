"""proser pipeline orchestrator and command-line entry point.

Runs every generator of one project type, in order, against a target
directory:

1. Build a ``GenerateContext`` (config, absolute root, storage).
2. For each generator, let the ``Writer`` generate and persist its files.
3. Collect a ``WriteReport`` per generator into a ``PipelineResult``.

The first fatal error aborts the run; files written by earlier generators
stay on disk.

Usage::

    proser ./my-project --type backend --answers answers.yaml
    python -m proser.pipeline ./my-project --non-interactive
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from proser.config import Config, Settings, load_answers
from proser.errors import GeneratorError, PipelineError, ProserError
from proser.project import ProjectType, collect_answers, default_registry
from proser.scaffolder.base import GenerateContext
from proser.scaffolder.writer import WriteReport, Writer
from proser.storage.base import Storage, normalize
from proser.storage.os_storage import OSStorage
from proser.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class PipelineResult:
    """Outcome of one ``Pipeline.run``."""

    project_type: str
    root: Path
    reports: list[WriteReport] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def files_written(self) -> int:
        return sum(report.file_count for report in self.reports)

    @property
    def warnings(self) -> list[str]:
        return [warning for report in self.reports for warning in report.warnings]

    def written_paths(self) -> list[Path]:
        return [path for report in self.reports for path in report.written]

    def summary(self) -> dict[str, str]:
        """Rows for the CLI summary table."""
        rows = {"Project type": self.project_type, "Target": str(self.root)}
        for report in self.reports:
            label = f"{report.file_count} file(s)"
            if report.warnings:
                label += f", {len(report.warnings)} warning(s)"
            rows[report.generator] = label
        rows["Total"] = f"{self.files_written} file(s) in {self.elapsed:.2f}s"
        return rows


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs a project type's generators against one target root.

    Attributes:
        project_type: The generators (and questions) to use.
        storage: Where files are written; defaults to the real filesystem.
    """

    def __init__(
        self,
        project_type: ProjectType,
        storage: Storage | None = None,
        quiet: bool = False,
    ) -> None:
        self.project_type = project_type
        self.storage = storage if storage is not None else OSStorage()
        self.quiet = quiet

    def run(self, config: Config, root: str | Path) -> PipelineResult:
        """Generate and write every file for *config* under *root*.

        Raises:
            PipelineError: Naming the generator whose output could not be
                produced or written.
        """
        root = normalize(os.path.abspath(os.fspath(root)))
        context = GenerateContext(config=config, root=root, storage=self.storage)
        writer = Writer(self.storage)
        result = PipelineResult(project_type=self.project_type.name, root=root)

        start = time.monotonic()
        for generator in self.project_type.generators:
            try:
                report = writer.run_generator(generator, context)
            except GeneratorError as exc:
                raise PipelineError(generator.name, str(exc)) from exc
            result.reports.append(report)
            if not self.quiet:
                console.print(
                    f"  [green]+[/green] {generator.name}: {report.file_count} file(s)"
                )
        result.elapsed = time.monotonic() - start
        return result


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``proser`` / ``python -m proser.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="proser",
        description="proser -- scaffold AI-assistant instruction files into a project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  proser\n"
            "  proser ./my-project --type backend\n"
            "  proser ./my-project -a answers.yaml --max-depth 2\n"
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target project directory (default: current directory)",
    )
    parser.add_argument(
        "--type", "-t",
        default=None,
        help="Project type: fullstack, frontend or backend (default: fullstack)",
    )
    parser.add_argument(
        "--answers", "-a",
        default=None,
        help="YAML or JSON file with answers; unanswered questions use defaults",
    )
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not prompt; accept the default for every question",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Deepest directory level that receives an AGENT.md (default: 3)",
    )

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid PROSER_* environment setting: {exc}")
        sys.exit(1)

    max_depth = args.max_depth if args.max_depth is not None else settings.max_depth
    if max_depth < 1:
        print_error(f"Error: --max-depth must be at least 1, got {max_depth}")
        sys.exit(1)

    # Validate the target before asking any questions.
    target = Path(os.path.abspath(args.target))
    if not target.exists():
        print_error(f"Error: target path not found: {target}")
        sys.exit(1)
    if not target.is_dir():
        print_error(f"Error: target path is not a directory: {target}")
        sys.exit(1)

    registry = default_registry(max_depth=max_depth)
    try:
        if args.type:
            project_type = registry.get(args.type)
        else:
            if settings.project_type not in registry:
                print_warning(
                    f"Unknown project type {settings.project_type!r}; "
                    f"using {registry.default!r}."
                )
            project_type = registry.get_or_default(settings.project_type)
    except ProserError as exc:
        print_error(f"Error: {exc} (choose from: {', '.join(registry.names())})")
        sys.exit(1)

    preset: dict[str, str] = {}
    if args.answers:
        try:
            preset = load_answers(args.answers)
        except (OSError, ValueError) as exc:
            print_error(f"Error: could not read answers file {args.answers}: {exc}")
            sys.exit(1)
        except yaml.YAMLError as exc:
            print_error(f"Error: could not parse answers file {args.answers}: {exc}")
            sys.exit(1)

    print_header(f"proser -- {project_type.name}")
    console.print(f"Target directory: {target}\n")

    interactive = not (args.non_interactive or settings.non_interactive or args.answers)
    answers = collect_answers(project_type.questions, interactive=interactive, preset=preset)
    config = Config.from_answers(answers)

    pipeline = Pipeline(project_type)
    try:
        result = pipeline.run(config, target)
    except ProserError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    console.print()
    print_summary_table(result.summary(), title="Generated Files")
    if result.warnings:
        print_warning(f"Completed with {len(result.warnings)} warning(s).")
    print_success("Setup complete!")


if __name__ == "__main__":
    main()
