"""SearchOrchestrator: mode dispatch, debouncing and selection resolution.

Owns the active mode, the raw query, the file index snapshot and the
current result set. Every query edit restarts a short debounce window;
when it elapses the latest query is searched in the active mode and the
ranked results replace the previous set wholesale.

Searches may run off the input thread (see ThreadingScheduler). Each edit
bumps a generation counter and a result set is only published if its
generation is still current, so a slow search for an older query can never
overwrite the results of a newer one.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from pathlib import Path
from typing import Iterable

from ..models.exceptions import SelectionError
from ..models.search import (
    Candidate,
    ContentMatch,
    FinderState,
    IndexSnapshot,
    SearchMode,
    SearchResult,
    Selection,
)
from .config import FinderSettings
from .debounce import Debouncer, Scheduler
from .events import (
    BufferChosenEvent,
    CommandChosenEvent,
    ContentChosenEvent,
    Event,
    EventBus,
    FileChosenEvent,
    FinderDismissedEvent,
    IndexRebuiltEvent,
    ModeChangedEvent,
    ResultCountChangedEvent,
    ResultsUpdatedEvent,
)
from .fuzzy import DEFAULT_WEIGHTS, ScoringWeights, rank
from .indexer import FileIndexer, scan_content
from .mode_registry import ModeRegistry

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Drives the finder: query edits in, ranked results and selections out."""

    def __init__(
        self,
        registry: ModeRegistry | None = None,
        settings: FinderSettings | None = None,
        scheduler: Scheduler | None = None,
        bus: EventBus | None = None,
        indexer: FileIndexer | None = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ):
        """Initialize the orchestrator.

        Args:
            registry: Command catalog and open buffers (default catalog if omitted)
            settings: Finder tunables (defaults if omitted)
            scheduler: Where debounced searches run (timer thread if omitted)
            bus: Event bus for outputs (application singleton if omitted)
            indexer: File indexer (built from settings if omitted)
            weights: Fuzzy scoring weights
        """
        self._settings = settings or FinderSettings()
        self._registry = registry or ModeRegistry()
        self._indexer = indexer or FileIndexer(
            max_depth=self._settings.max_depth,
            exclude_dirs=self._settings.extra_exclude_dirs,
            extensions=self._settings.extra_extensions,
        )
        self._bus = bus or EventBus.get()
        self._weights = weights
        self._debouncer = Debouncer(self._settings.debounce_seconds, scheduler)
        self._lock = threading.RLock()

        self._mode = SearchMode.FILE
        self._query = ""
        self._root: Path | None = None
        self._snapshot: IndexSnapshot | None = None
        self._results: list[SearchResult] = []
        self._state = FinderState.IDLE
        self._generation = 0
        self._visible = False

    # --- State ---

    @property
    def mode(self) -> SearchMode:
        return self._mode

    @property
    def query(self) -> str:
        return self._query

    @property
    def root_path(self) -> Path | None:
        return self._root

    @property
    def snapshot(self) -> IndexSnapshot | None:
        return self._snapshot

    @property
    def results(self) -> tuple[SearchResult, ...]:
        return tuple(self._results)

    @property
    def state(self) -> FinderState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def registry(self) -> ModeRegistry:
        return self._registry

    @property
    def settings(self) -> FinderSettings:
        return self._settings

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    # --- Inputs ---

    def set_root_path(self, path: Path | str | None) -> None:
        """Set the directory indexed by file and content modes.

        An empty root falls back to the current working directory. Changing
        the root drops the snapshot; it is rebuilt on next use.
        """
        root = Path(path).expanduser() if path else Path.cwd()
        try:
            root = root.resolve()
        except (OSError, RuntimeError):
            pass
        with self._lock:
            if root == self._root:
                return
            self._root = root
            self._snapshot = None
        logger.debug(f"Root path set to {root}")

    def set_open_files(self, files: Iterable[Path | str]) -> None:
        """Replace the buffer list searched in buffer mode."""
        self._registry.set_open_files(files)

    def set_mode(self, mode: SearchMode) -> None:
        """Switch mode, clearing the query and results.

        File and content modes build the index if none exists for the root.
        """
        with self._lock:
            self._debouncer.cancel()
            self._mode = mode
            self._query = ""
            self._results = []
            self._state = FinderState.IDLE
            self._generation += 1

        self._emit(ModeChangedEvent(mode=mode, label=mode.label, placeholder=mode.placeholder))
        self._emit(ResultCountChangedEvent(count=0))

        if mode.uses_index:
            self.ensure_index()

    def set_query(self, text: str) -> None:
        """Store the raw query and restart the debounce window."""
        with self._lock:
            self._query = text
            self._generation += 1
            generation = self._generation
        self._debouncer.trigger(partial(self._run_search, generation))

    def search_now(self) -> None:
        """Search the current query immediately, skipping the debounce window."""
        with self._lock:
            self._debouncer.cancel()
            generation = self._generation
        self._run_search(generation)

    # --- Index ---

    def ensure_index(self, generation: int | None = None) -> IndexSnapshot:
        """Return the snapshot for the current root, building it if needed.

        A build made on behalf of a search (generation given) is only kept
        if that search is still current and the finder is still open.
        """
        with self._lock:
            if self._root is None:
                self._root = Path.cwd()
            root = self._root
            snapshot = self._snapshot
        if snapshot is not None and snapshot.root == root:
            return snapshot

        snapshot = self._indexer.build_snapshot(root)
        with self._lock:
            # The root may have moved on while we were walking
            keep = self._root == root
            if generation is not None:
                keep = keep and generation == self._generation and self._visible
            if keep:
                self._snapshot = snapshot
        if not keep:
            logger.debug(f"Dropping stale index for {root}")
            return snapshot
        self._emit(IndexRebuiltEvent(root=snapshot.root, file_count=len(snapshot)))
        return snapshot

    def reindex(self) -> IndexSnapshot:
        """Rebuild the snapshot for the current root."""
        with self._lock:
            self._snapshot = None
        return self.ensure_index()

    # --- Entry points ---

    def show_file_search(self, root: Path | str | None) -> None:
        """Open the finder on files under root."""
        self.set_root_path(root)
        self._show(SearchMode.FILE)

    def show_content_search(self, root: Path | str | None) -> None:
        """Open the finder on the contents of files under root."""
        self.set_root_path(root)
        self._show(SearchMode.CONTENT)

    def show_buffer_search(self, open_files: Iterable[Path | str]) -> None:
        """Open the finder on the host's open buffers."""
        self.set_open_files(open_files)
        self._show(SearchMode.BUFFER)

    def show_command_search(self) -> None:
        """Open the finder on the command catalog."""
        self._show(SearchMode.COMMAND)

    def _show(self, mode: SearchMode) -> None:
        self.set_mode(mode)
        self._visible = True
        self.search_now()

    # --- Search ---

    def _run_search(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Skipping superseded search (generation {generation})")
                return
            mode = self._mode
            query = self._query
            self._state = FinderState.SEARCHING

        results = self._search(mode, query.strip(), generation)

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale results for {query!r} (generation {generation})")
                return
            self._results = results
            self._state = FinderState.DISPLAYING

        logger.debug(f"{mode.value} search for {query!r}: {len(results)} results")
        self._emit(ResultsUpdatedEvent(mode=mode, query=query, count=len(results)))
        self._emit(ResultCountChangedEvent(count=len(results)))

    def _search(self, mode: SearchMode, query: str, generation: int) -> list[SearchResult]:
        """Run one search synchronously and return ranked, truncated results."""
        limit = self._settings.name_result_limit

        if mode == SearchMode.FILE:
            snapshot = self.ensure_index(generation)
            candidates = [
                Candidate(text=snapshot.relative(path), payload=path)
                for path in snapshot.files
            ]
            return rank(query, candidates, limit, self._weights)

        if mode == SearchMode.BUFFER:
            return rank(query, self._registry.buffer_candidates(), limit, self._weights)

        if mode == SearchMode.COMMAND:
            return rank(query, self._registry.command_candidates(), limit, self._weights)

        return scan_content(
            self.ensure_index(generation),
            query,
            limit=self._settings.content_result_limit,
            preview_chars=self._settings.content_preview_chars,
        )

    # --- Selection ---

    def select(self, index: int) -> Selection:
        """Resolve the result at index, notify the host and dismiss.

        Raises:
            SelectionError: If no result exists at index
        """
        with self._lock:
            mode = self._mode
            results = self._results
            if not 0 <= index < len(results):
                raise SelectionError(
                    f"No result at index {index}",
                    suggestion=f"{len(results)} results available",
                )
            result = results[index]

        selection, event = self._resolve(mode, result)
        self._emit(event)
        self.dismiss()
        return selection

    def _resolve(self, mode: SearchMode, result: SearchResult) -> tuple[Selection, Event]:
        if isinstance(result, ContentMatch):
            return (
                Selection(mode=mode, path=result.path, line_number=result.line_number),
                ContentChosenEvent(path=result.path, line_number=result.line_number),
            )

        payload = result.candidate.payload
        if mode == SearchMode.COMMAND:
            action_id = str(payload)
            return Selection(mode=mode, command_id=action_id), CommandChosenEvent(action_id=action_id)

        path = Path(payload)
        if mode == SearchMode.BUFFER:
            return Selection(mode=mode, path=path), BufferChosenEvent(path=path)
        return Selection(mode=mode, path=path), FileChosenEvent(path=path)

    def dismiss(self) -> None:
        """Close the finder: cancel pending work, drop the index and results."""
        with self._lock:
            self._debouncer.cancel()
            self._generation += 1
            self._snapshot = None
            self._results = []
            self._state = FinderState.IDLE
            self._visible = False
            mode = self._mode
        self._emit(FinderDismissedEvent(mode=mode))

    def _emit(self, event: Event) -> None:
        self._bus.emit(event)
