"""Tests for FileIndexer and the content scan."""

import os
from pathlib import Path

import pytest

from quick_open.models.search import IndexSnapshot
from quick_open.services.indexer import (
    CONTENT_SCORE,
    FileIndexer,
    scan,
    scan_content,
)

from .conftest import write_tree


def _relative(root: Path, files: list[Path]) -> list[str]:
    return [f.relative_to(root.resolve()).as_posix() for f in files]


class TestScan:
    """Tests for the directory walk."""

    def test_finds_allowed_files(self, project: Path):
        files = _relative(project, scan(project))
        assert "src/main.rs" in files
        assert "src/lib.rs" in files
        assert "README.md" in files

    def test_skips_excluded_and_hidden_dirs(self, project: Path):
        files = _relative(project, scan(project))
        assert not any(f.startswith("node_modules/") for f in files)
        assert not any(f.startswith(".git/") for f in files)
        assert not any(f.startswith("build/") for f in files)

    def test_skips_unlisted_extensions(self, project: Path):
        assert "image.png" not in _relative(project, scan(project))

    def test_skips_hidden_files(self, tmp_path: Path):
        write_tree(tmp_path, {".env.json": "{}", "visible.json": "{}"})
        assert _relative(tmp_path, scan(tmp_path)) == ["visible.json"]

    def test_build_descriptors_indexed(self, tmp_path: Path):
        write_tree(tmp_path, {"Makefile": "all:\n", "CMakeLists.txt": "project(x)\n", "LICENSE": "MIT\n"})
        files = _relative(tmp_path, scan(tmp_path))
        assert "Makefile" in files
        assert "CMakeLists.txt" in files
        assert "LICENSE" not in files

    def test_returns_absolute_paths(self, project: Path):
        assert all(f.is_absolute() for f in scan(project))

    def test_files_before_subdirectories_in_name_order(self, tmp_path: Path):
        write_tree(tmp_path, {
            "b.py": "",
            "A.py": "",
            "sub/c.py": "",
            "Another/d.py": "",
        })
        assert _relative(tmp_path, scan(tmp_path)) == ["A.py", "b.py", "Another/d.py", "sub/c.py"]

    def test_depth_limit(self, tmp_path: Path):
        write_tree(tmp_path, {
            "top.py": "",
            "one/mid.py": "",
            "one/two/deep.py": "",
        })
        assert _relative(tmp_path, scan(tmp_path, max_depth=1)) == ["top.py"]
        assert _relative(tmp_path, scan(tmp_path, max_depth=2)) == ["top.py", "one/mid.py"]
        assert len(scan(tmp_path, max_depth=3)) == 3

    def test_zero_depth_finds_nothing(self, project: Path):
        assert scan(project, max_depth=0) == []

    def test_missing_root_is_empty(self, tmp_path: Path):
        assert scan(tmp_path / "does-not-exist") == []

    def test_file_root_is_empty(self, tmp_path: Path):
        target = tmp_path / "file.py"
        target.write_text("")
        assert scan(target) == []

    def test_extra_rules(self, tmp_path: Path):
        write_tree(tmp_path, {"notes.org": "", "generated/x.py": "", "keep.py": ""})
        indexer = FileIndexer(exclude_dirs=["generated"], extensions=["org"])
        assert _relative(tmp_path, indexer.scan(tmp_path)) == ["keep.py", "notes.org"]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_unreadable_directory_skipped(self, tmp_path: Path):
        write_tree(tmp_path, {"ok.py": "", "locked/secret.py": ""})
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            assert _relative(tmp_path, scan(tmp_path)) == ["ok.py"]
        finally:
            locked.chmod(0o755)

    def test_build_snapshot(self, project: Path):
        snapshot = FileIndexer().build_snapshot(project)
        assert snapshot.root == project.resolve()
        assert isinstance(snapshot.files, tuple)
        assert snapshot.relative(project.resolve() / "src" / "main.rs") == "src/main.rs"


class TestScanContent:
    """Tests for the literal line scan."""

    def _snapshot(self, root: Path) -> IndexSnapshot:
        return FileIndexer().build_snapshot(root)

    def test_finds_matching_line(self, tmp_path: Path):
        write_tree(tmp_path, {"notes.txt": "first line\nTODO: fix bug\nlast line\n"})
        matches = scan_content(self._snapshot(tmp_path), "TODO")
        assert len(matches) == 1
        match = matches[0]
        assert match.path.name == "notes.txt"
        assert match.line_number == 2
        assert match.line_text == "TODO: fix bug"
        assert match.display == "notes.txt:2: TODO: fix bug"
        assert match.column == 0
        assert match.score == CONTENT_SCORE

    def test_case_insensitive(self, tmp_path: Path):
        write_tree(tmp_path, {"a.py": "Hello World\n"})
        assert len(scan_content(self._snapshot(tmp_path), "hello world")) == 1

    def test_literal_not_regex(self, tmp_path: Path):
        """Metacharacters are matched literally."""
        write_tree(tmp_path, {"a.txt": "axb\na.b\n(a+\n"})
        matches = scan_content(self._snapshot(tmp_path), "a.b")
        assert [m.line_number for m in matches] == [2]
        assert [m.line_number for m in scan_content(self._snapshot(tmp_path), "(a+")] == [3]

    def test_empty_query_matches_nothing(self, project: Path):
        assert scan_content(self._snapshot(project), "") == []

    def test_ordered_by_path_then_line(self, tmp_path: Path):
        write_tree(tmp_path, {"b.txt": "x\nx\n", "a.txt": "x\n"})
        matches = scan_content(self._snapshot(tmp_path), "x")
        assert [(m.path.name, m.line_number) for m in matches] == [
            ("a.txt", 1),
            ("b.txt", 1),
            ("b.txt", 2),
        ]

    def test_limit_stops_scan(self, tmp_path: Path):
        write_tree(tmp_path, {"many.txt": "hit\n" * 500})
        matches = scan_content(self._snapshot(tmp_path), "hit", limit=200)
        assert len(matches) == 200
        assert matches[-1].line_number == 200

    def test_preview_truncated(self, tmp_path: Path):
        write_tree(tmp_path, {"long.txt": "    " + "y" * 200 + "\n"})
        match = scan_content(self._snapshot(tmp_path), "yyy", preview_chars=10)[0]
        assert match.display == "long.txt:1: " + "y" * 10
        assert match.column == 4

    def test_column_indexes_original_line(self, tmp_path: Path):
        """Characters that lowercase to several code points don't shift the column."""
        write_tree(tmp_path, {"dotted.txt": "İİ needle\n"})
        match = scan_content(self._snapshot(tmp_path), "needle")[0]
        assert match.column == 3
        assert match.line_text[match.column:match.column + 6] == "needle"

    def test_vanished_file_skipped(self, tmp_path: Path):
        """A file deleted after indexing doesn't abort the scan."""
        write_tree(tmp_path, {"gone.txt": "needle\n", "kept.txt": "needle\n"})
        snapshot = self._snapshot(tmp_path)
        (tmp_path / "gone.txt").unlink()
        matches = scan_content(snapshot, "needle")
        assert [m.path.name for m in matches] == ["kept.txt"]

    def test_undecodable_bytes_tolerated(self, tmp_path: Path):
        (tmp_path / "bin.txt").write_bytes(b"\xff\xfe needle \x80\n")
        assert len(scan_content(self._snapshot(tmp_path), "needle")) == 1
