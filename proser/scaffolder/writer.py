"""Persist a generator's ``FileSet`` through ``Storage``.

The writer is the only component that writes generated content.  It runs
one generator, verifies every path stays inside the generator's declared
namespace, and writes the files in ``FileSet`` order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from proser.errors import GeneratorError, StorageError, WriteError
from proser.storage.base import Storage, normalize
from proser.utils import print_warning

from .base import FileSet, GenerateContext, Generator


@dataclass
class WriteReport:
    """What one ``Writer.run_generator`` call did."""

    generator: str
    written: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.written)


class Writer:
    """Runs generators and writes their output under the context root."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def run_generator(self, generator: Generator, context: GenerateContext) -> WriteReport:
        """Generate and persist *generator*'s files.

        Raises:
            GeneratorError: If ``generate`` fails or emits a path outside the
                generator's namespace.  Nothing is written in that case.
            WriteError: If a write fails and the generator is not
                best-effort.  Files written before the failure remain.
        """
        try:
            files = generator.generate(context)
        except Exception as exc:
            raise GeneratorError(generator.name, str(exc)) from exc

        self._check_namespace(generator, files)

        report = WriteReport(generator=generator.name)
        root = normalize(context.root)
        for generated in files:
            target = root.joinpath(*generated.path.parts)
            try:
                self.storage.make_directory_tree(target.parent)
                self.storage.write_file(target, generated.content)
            except StorageError as exc:
                if not generator.best_effort:
                    raise WriteError(generator.name, target, str(exc)) from exc
                warning = f"Could not write {target}: {exc}"
                report.warnings.append(warning)
                print_warning(warning)
                continue
            report.written.append(target)
        return report

    @staticmethod
    def _check_namespace(generator: Generator, files: FileSet) -> None:
        for generated in files:
            if not generator.namespace.contains(generated.path):
                raise GeneratorError(
                    generator.name,
                    f"{generated.path} is outside its namespace {generator.namespace}",
                )
