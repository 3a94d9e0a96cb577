"""Tests for the directory scanner (proser.scaffolder.scanner).

Covers:
- Depth bound and transitive pruning
- Hidden and skip-listed directories (including the *.egg-info glob)
- Root exclusion, traversal order and error wrapping
"""

from __future__ import annotations

from pathlib import Path

import pytest

from proser.errors import StorageNotFoundError, TraversalError
from proser.scaffolder.scanner import DEFAULT_SKIP_DIRS, DirectoryScanner, SkipList
from proser.storage import MemoryStorage, OSStorage
from proser.storage.base import Storage


pytestmark = pytest.mark.unit

ROOT = Path("/project")


def _make_dirs(storage: Storage, root: Path, *rels: str) -> None:
    storage.make_directory_tree(root)
    for rel in rels:
        storage.make_directory_tree(root / rel)


class TestSkipList:
    def test_default_contains_known_names(self):
        skip = SkipList.default()
        for name in ("node_modules", "vendor", "__pycache__", "dist", "logs", "coverage"):
            assert skip.matches(name)
        assert len(skip) == len(DEFAULT_SKIP_DIRS)

    def test_egg_info_is_a_glob(self):
        skip = SkipList.default()
        assert skip.matches("proser.egg-info")
        assert skip.matches("*.egg-info")
        assert not skip.matches("egg-info-notes")

    def test_ordinary_names_not_skipped(self):
        skip = SkipList.default()
        for name in ("src", "app", "lib", "builder", "targets"):
            assert name not in skip

    def test_custom_list(self):
        skip = SkipList(["generated", "snap*"])
        assert skip.matches("generated")
        assert skip.matches("snapshots")
        assert not skip.matches("node_modules")


class TestDirectoryScanner:
    def test_depth_bound_scenario(self, memory_storage):
        _make_dirs(memory_storage, ROOT, "a/b/c/d", "node_modules")
        result = DirectoryScanner(memory_storage, max_depth=3).scan(ROOT)
        assert result == [ROOT / "a", ROOT / "a/b", ROOT / "a/b/c"]

    def test_root_is_never_included(self, memory_storage):
        _make_dirs(memory_storage, ROOT, "src")
        result = DirectoryScanner(memory_storage).scan(ROOT)
        assert ROOT not in result
        assert result == [ROOT / "src"]

    def test_empty_root(self, memory_storage):
        assert DirectoryScanner(memory_storage).scan(ROOT) == []

    def test_hidden_directories_are_pruned(self, memory_storage):
        _make_dirs(memory_storage, ROOT, ".github/workflows", ".cache/src", "src/.hidden/deep")
        result = DirectoryScanner(memory_storage).scan(ROOT)
        assert result == [ROOT / "src"]

    def test_skip_listed_directories_are_pruned_transitively(self, memory_storage):
        _make_dirs(
            memory_storage, ROOT,
            "node_modules/pkg/lib",
            "app/vendor/github.com",
            "app/core",
            "pkg.egg-info/sub",
        )
        result = DirectoryScanner(memory_storage).scan(ROOT)
        assert result == [ROOT / "app", ROOT / "app/core"]

    def test_files_are_ignored(self, memory_storage):
        memory_storage.write_file(ROOT / "README.md", b"x")
        memory_storage.write_file(ROOT / "src" / "main.go", b"x")
        result = DirectoryScanner(memory_storage).scan(ROOT)
        assert result == [ROOT / "src"]

    @pytest.mark.parametrize("max_depth", [1, 2, 3, 4])
    def test_every_result_within_depth(self, memory_storage, max_depth):
        _make_dirs(memory_storage, ROOT, "a/b/c/d/e", "x/y", "z")
        result = DirectoryScanner(memory_storage, max_depth=max_depth).scan(ROOT)
        assert result
        for directory in result:
            assert len(directory.relative_to(ROOT).parts) <= max_depth

    def test_deeper_directories_are_not_descended(self):
        calls: list[Path] = []

        class RecordingStorage(MemoryStorage):
            def enumerate(self, root, visit):
                def recording_visit(path, is_dir):
                    calls.append(path)
                    return visit(path, is_dir)

                super().enumerate(root, recording_visit)

        storage = RecordingStorage()
        _make_dirs(storage, ROOT, "a/b/c")
        DirectoryScanner(storage, max_depth=1).scan(ROOT)
        assert ROOT / "a" / "b" in calls
        assert ROOT / "a" / "b" / "c" not in calls

    def test_traversal_order(self, memory_storage):
        _make_dirs(memory_storage, ROOT, "b/x", "a/y", "c")
        result = DirectoryScanner(memory_storage).scan(ROOT)
        assert result == [ROOT / "a", ROOT / "a/y", ROOT / "b", ROOT / "b/x", ROOT / "c"]

    def test_fresh_result_per_call(self, memory_storage):
        scanner = DirectoryScanner(memory_storage)
        _make_dirs(memory_storage, ROOT, "a")
        first = scanner.scan(ROOT)
        _make_dirs(memory_storage, ROOT, "b")
        second = scanner.scan(ROOT)
        assert first == [ROOT / "a"]
        assert second == [ROOT / "a", ROOT / "b"]

    def test_invalid_depth(self, memory_storage):
        with pytest.raises(ValueError):
            DirectoryScanner(memory_storage, max_depth=0)

    def test_missing_root_raises_traversal_error(self, memory_storage):
        with pytest.raises(TraversalError) as excinfo:
            DirectoryScanner(memory_storage).scan("/does/not/exist")
        assert excinfo.value.root == Path("/does/not/exist")
        assert isinstance(excinfo.value.__cause__, StorageNotFoundError)

    def test_nested_failure_names_the_root(self, memory_storage):
        class FailingStorage(MemoryStorage):
            def enumerate(self, root, visit):
                raise TraversalError(Path(root) / "broken", "Failed to list directory")

        with pytest.raises(TraversalError) as excinfo:
            DirectoryScanner(FailingStorage()).scan(ROOT)
        assert excinfo.value.root == ROOT
        assert "broken" in str(excinfo.value)

    def test_matches_real_filesystem(self, tmp_path: Path, memory_storage):
        rels = ("src/api/v1/handlers", "web/.next/cache", "web/components", "build/out")
        _make_dirs(memory_storage, ROOT, *rels)
        _make_dirs(OSStorage(), tmp_path, *rels)

        memory_result = [p.relative_to(ROOT) for p in DirectoryScanner(memory_storage).scan(ROOT)]
        disk_result = [p.relative_to(tmp_path) for p in DirectoryScanner(OSStorage()).scan(tmp_path)]
        assert memory_result == disk_result
        assert [p.as_posix() for p in memory_result] == [
            "src", "src/api", "src/api/v1", "web", "web/components",
        ]
