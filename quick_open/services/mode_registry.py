"""ModeRegistry: the non-filesystem sources of the finder.

Holds the command catalog and the host's list of open buffers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..models.search import Candidate
from .command_registry import CommandRegistry, create_default_registry


class ModeRegistry:
    """Command catalog plus caller-supplied open buffers."""

    def __init__(
        self,
        commands: CommandRegistry | None = None,
        open_files: Iterable[Path | str] = (),
    ):
        self.commands = commands if commands is not None else create_default_registry()
        self._open_files: tuple[Path, ...] = ()
        self.set_open_files(open_files)

    @property
    def open_files(self) -> tuple[Path, ...]:
        return self._open_files

    def set_open_files(self, files: Iterable[Path | str]) -> None:
        """Replace the open buffer list, keeping the host's order."""
        self._open_files = tuple(Path(f) for f in files)

    def buffer_candidates(self) -> list[Candidate]:
        """One candidate per open buffer, matched on its file name."""
        return [
            Candidate(text=path.name, payload=path, detail=str(path))
            for path in self._open_files
        ]

    def command_candidates(self) -> list[Candidate]:
        """One candidate per visible command, matched on its label."""
        return self.commands.candidates()
