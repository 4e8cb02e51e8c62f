"""FileIndexer: bounded directory walk and literal content scan.

The walk produces a flat, deterministic list of files for the finder.
Directories are skipped by name (VCS, build output, dependency caches,
anything hidden) and files are kept by extension or build-descriptor name.
Nothing found on disk is fatal: unreadable entries are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..models.search import ContentMatch, IndexSnapshot

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8

EXCLUDED_DIRS = frozenset({
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "__pycache__",
    "target",
    "build",
    "dist",
    ".cache",
    "vendor",
})

INDEXED_EXTENSIONS = frozenset({
    # Markup and docs
    ".md", ".txt", ".html", ".css", ".scss",
    # Source
    ".cpp", ".h", ".hpp", ".c", ".py", ".rs",
    ".js", ".ts", ".jsx", ".tsx",
    # Config
    ".json", ".yaml", ".yml", ".toml",
    # Shell
    ".sh", ".bash", ".zsh",
})

BUILD_DESCRIPTORS = frozenset({"CMakeLists.txt", "Makefile", "Cargo.toml"})

CONTENT_SCORE = 100  # Every content hit shares one relevance value
DEFAULT_PREVIEW_CHARS = 80


class FileIndexer:
    """Walks a root directory and lists the files worth searching."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_dirs: Iterable[str] = (),
        extensions: Iterable[str] = (),
    ):
        """Initialize the indexer.

        Args:
            max_depth: Directory levels to descend, counting the root as 1
            exclude_dirs: Extra directory names to skip
            extensions: Extra file suffixes to index (".ext")
        """
        self.max_depth = max_depth
        self.exclude_dirs = EXCLUDED_DIRS | frozenset(exclude_dirs)
        self.extensions = INDEXED_EXTENSIONS | frozenset(
            ext if ext.startswith(".") else f".{ext}" for ext in extensions
        )

    def is_excluded(self, name: str) -> bool:
        """Check if a directory or file name is skipped outright."""
        return name.startswith(".") or name in self.exclude_dirs

    def is_indexed_file(self, name: str) -> bool:
        """Check if a file name passes the allow-list."""
        if name in BUILD_DESCRIPTORS:
            return True
        dot = name.rfind(".")
        return dot > 0 and name[dot:] in self.extensions

    def scan(self, root: Path, max_depth: int | None = None) -> list[Path]:
        """List indexable files under root.

        Files in a directory come before its subdirectories' files; entries
        are visited in case-insensitive name order.

        Returns:
            Absolute paths. Empty if root is missing or not a directory.
        """
        depth = self.max_depth if max_depth is None else max_depth
        root = _resolve_root(root)
        try:
            is_dir = root.is_dir()
        except OSError:
            is_dir = False
        if not is_dir:
            logger.debug(f"Index root is not a directory: {root}")
            return []

        files: list[Path] = []
        self._walk(root, depth, files)
        logger.debug(f"Indexed {len(files)} files under {root}")
        return files

    def build_snapshot(self, root: Path, max_depth: int | None = None) -> IndexSnapshot:
        """Scan root and freeze the result."""
        resolved = _resolve_root(root)
        return IndexSnapshot(root=resolved, files=tuple(self.scan(resolved, max_depth)))

    def _walk(self, directory: Path, remaining: int, files: list[Path]) -> None:
        if remaining <= 0:
            return

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name.lower())
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        subdirs: list[Path] = []
        for entry in entries:
            if self.is_excluded(entry.name):
                continue
            try:
                if entry.is_symlink() and entry.is_dir():
                    continue
                if entry.is_dir():
                    subdirs.append(entry)
                elif entry.is_file() and self.is_indexed_file(entry.name):
                    files.append(entry)
            except OSError:
                continue

        for subdir in subdirs:
            self._walk(subdir, remaining - 1, files)


def _resolve_root(root: Path) -> Path:
    try:
        return root.expanduser().resolve()
    except (OSError, RuntimeError):
        return root


def scan(root: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Path]:
    """List indexable files under root with the default rules."""
    return FileIndexer(max_depth=max_depth).scan(root)


def _find_folded(line: str, needle: str) -> int:
    """Index in line of the first case-insensitive occurrence of needle, or -1.

    needle must already be lowercased. Some characters lowercase to more
    than one code point, so the hit is mapped back onto line.
    """
    folded = line.lower()
    found = folded.find(needle)
    if found < 0 or len(folded) == len(line):
        return found
    offset = 0
    for i, char in enumerate(line):
        if offset >= found:
            return i
        offset += len(char.lower())
    return len(line)


def scan_content(
    snapshot: IndexSnapshot,
    query: str,
    limit: int | None = None,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> list[ContentMatch]:
    """Find lines containing query as a literal, case-insensitive substring.

    Files are read in snapshot order and lines in file order, so results
    come out sorted by (path, line number). Scanning stops once limit hits
    are collected.

    Returns:
        One ContentMatch per matching line. Empty for an empty query.
    """
    if not query:
        return []

    needle = query.lower()
    matches: list[ContentMatch] = []

    for path in snapshot.files:
        if limit is not None and len(matches) >= limit:
            break
        relative = snapshot.relative(path)
        try:
            with path.open("r", encoding="utf-8", errors="replace") as handle:
                for line_number, raw in enumerate(handle, start=1):
                    line = raw.rstrip("\r\n")
                    column = _find_folded(line, needle)
                    if column < 0:
                        continue
                    preview = line.strip()[:preview_chars]
                    matches.append(ContentMatch(
                        path=path,
                        line_number=line_number,
                        line_text=line,
                        display=f"{relative}:{line_number}: {preview}",
                        column=column,
                        score=CONTENT_SCORE,
                    ))
                    if limit is not None and len(matches) >= limit:
                        break
        except OSError as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            continue

    return matches
