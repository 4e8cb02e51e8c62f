"""Data models for Quick Open."""

from .search import (
    Candidate,
    ContentMatch,
    FinderState,
    IndexSnapshot,
    MatchResult,
    SearchMode,
    SearchResult,
    Selection,
)
from .exceptions import (
    QuickOpenError,
    ConfigError,
    ConfigValidationError,
    SearchError,
    SelectionError,
)

__all__ = [
    # Search models
    "Candidate",
    "ContentMatch",
    "FinderState",
    "IndexSnapshot",
    "MatchResult",
    "SearchMode",
    "SearchResult",
    "Selection",
    # Exceptions
    "QuickOpenError",
    "ConfigError",
    "ConfigValidationError",
    "SearchError",
    "SelectionError",
]
