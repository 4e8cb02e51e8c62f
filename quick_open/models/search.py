"""Search models for Quick Open."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SearchMode(Enum):
    """Source the finder is currently searching."""

    FILE = "files"  # Files under the root
    CONTENT = "content"  # Lines inside indexed files
    COMMAND = "commands"  # Editor command catalog
    BUFFER = "buffers"  # Files open in the host

    @property
    def label(self) -> str:
        """Title shown above the search input."""
        return _MODE_LABELS[self][0]

    @property
    def placeholder(self) -> str:
        """Placeholder text for the search input."""
        return _MODE_LABELS[self][1]

    @property
    def uses_index(self) -> bool:
        """Whether this mode searches the file index."""
        return self in (SearchMode.FILE, SearchMode.CONTENT)


_MODE_LABELS: dict[SearchMode, tuple[str, str]] = {
    SearchMode.FILE: ("Files", "Search files..."),
    SearchMode.CONTENT: ("Search in Files", "Search content..."),
    SearchMode.COMMAND: ("Commands", "Search commands..."),
    SearchMode.BUFFER: ("Open Buffers", "Search open files..."),
}


class FinderState(Enum):
    """Search lifecycle, re-entered on every query edit."""

    IDLE = "idle"
    SEARCHING = "searching"
    DISPLAYING = "displaying"


@dataclass(frozen=True)
class Candidate:
    """A searchable unit.

    Attributes:
        text: String the matcher scores (relative path, file name or label)
        payload: Absolute path for files and buffers, action id for commands
        detail: Optional secondary display string (full path for buffers)
    """

    text: str
    payload: Path | str
    detail: str | None = None


@dataclass(frozen=True)
class MatchResult:
    """A scored fuzzy match.

    positions index into candidate.text and hold one entry per query
    character whenever score > 0.
    """

    score: int
    positions: tuple[int, ...]
    candidate: Candidate

    @property
    def text(self) -> str:
        return self.candidate.text


@dataclass(frozen=True)
class ContentMatch:
    """A literal occurrence of the query inside a file line."""

    path: Path
    line_number: int  # 1-based
    line_text: str
    display: str  # "relative/path:line: text"
    column: int = 0  # 0-based index of the first occurrence
    score: int = 100

    @property
    def text(self) -> str:
        return self.display


SearchResult = MatchResult | ContentMatch


@dataclass(frozen=True)
class IndexSnapshot:
    """Immutable list of indexed files for one root.

    Replaced wholesale when the root changes, never mutated in place.
    """

    root: Path
    files: tuple[Path, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.files)

    def relative(self, path: Path) -> str:
        """Path relative to the root, POSIX separators."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


@dataclass(frozen=True)
class Selection:
    """A resolved choice handed back to the host.

    Exactly one payload shape is populated:
    - FILE / BUFFER: path
    - CONTENT: path and line_number
    - COMMAND: command_id
    """

    mode: SearchMode
    path: Path | None = None
    line_number: int | None = None
    command_id: str | None = None

    def describe(self) -> str:
        """Single-line rendering for CLI output."""
        if self.command_id is not None:
            return self.command_id
        if self.line_number is not None:
            return f"{self.path}:{self.line_number}"
        return str(self.path)
