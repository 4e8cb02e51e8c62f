"""Finder modal: the interactive front end of the search orchestrator.

Forwards every keystroke to the orchestrator and redraws when it publishes
a new result set. Ranking, debouncing and selection resolution all live in
SearchOrchestrator; this screen only presents them.
"""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message_pump import MessagePump
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Input, Static

from .base import QuickOpenModalScreen
from ..models.search import ContentMatch, SearchMode, SearchResult, Selection
from ..services.events import (
    EventBus,
    IndexRebuiltEvent,
    ModeChangedEvent,
    ResultsUpdatedEvent,
)
from ..services.orchestrator import SearchOrchestrator

MODE_CYCLE = [SearchMode.FILE, SearchMode.CONTENT, SearchMode.COMMAND, SearchMode.BUFFER]


class _TimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Scheduler that runs debounced searches on the textual event loop."""

    def __init__(self, pump: MessagePump) -> None:
        self._pump = pump

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        return _TimerHandle(self._pump.set_timer(delay, callback))


def result_label(result: SearchResult) -> str:
    """Plain display text for one result row."""
    if isinstance(result, ContentMatch):
        return result.display
    detail = result.candidate.detail
    if detail and detail != result.candidate.text:
        return f"{result.candidate.text}  {detail}"
    return result.candidate.text


class ResultItem(Static):
    """A single result row."""

    def __init__(self, result: SearchResult, **kwargs) -> None:
        super().__init__(result_label(result), markup=False, **kwargs)
        self.result = result


class FinderScreen(QuickOpenModalScreen[Selection | None]):
    """Searchable quick-open modal."""

    BINDINGS = [
        Binding("escape", "dismiss_modal", "Cancel"),
        Binding("enter", "execute", "Open"),
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
        Binding("ctrl+p", "move_up", "Up", show=False),
        Binding("ctrl+n", "move_down", "Down", show=False),
        Binding("ctrl+t", "next_mode", "Mode", show=False),
    ]

    DEFAULT_CSS = """
    FinderScreen #finder-input {
        width: 100%;
        margin-bottom: 1;
    }

    FinderScreen #results {
        height: auto;
        max-height: 60vh;
        min-height: 5;
        overflow-y: auto;
    }

    FinderScreen #finder-status {
        color: $text-muted;
        margin-top: 1;
    }
    """

    selected_index: reactive[int] = reactive(0)

    def __init__(self, orchestrator: SearchOrchestrator, bus: EventBus | None = None) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._bus = bus or EventBus.get()
        self._updating = False  # Guard flag for DOM updates

    def compose(self) -> ComposeResult:
        self.add_class("finder-overlay")

        mode = self._orchestrator.mode
        with Vertical(id="dialog"):
            yield Static(mode.label, id="finder-mode", classes="finder-title")
            yield Input(placeholder=mode.placeholder, id="finder-input")
            yield Vertical(id="results")
            yield Static("0 results", id="finder-status")
            yield Static("↑↓ navigate  enter open  ctrl+t mode  esc cancel", classes="finder-hint")

    def on_mount(self) -> None:
        super().on_mount()
        self._bus.subscribe(ResultsUpdatedEvent, self._on_results_updated)
        self._bus.subscribe(ModeChangedEvent, self._on_mode_changed)
        self._bus.subscribe(IndexRebuiltEvent, self._on_index_rebuilt)
        self._update_results()
        self.query_one("#finder-input", Input).focus()

    def on_unmount(self) -> None:
        self._bus.unsubscribe(ResultsUpdatedEvent, self._on_results_updated)
        self._bus.unsubscribe(ModeChangedEvent, self._on_mode_changed)
        self._bus.unsubscribe(IndexRebuiltEvent, self._on_index_rebuilt)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Hand the raw query to the orchestrator; results arrive by event."""
        if event.value != self._orchestrator.query:
            self._orchestrator.set_query(event.value)

    def _on_results_updated(self, event: ResultsUpdatedEvent) -> None:
        self.selected_index = 0
        self._update_results()

    def _on_mode_changed(self, event: ModeChangedEvent) -> None:
        try:
            self.query_one("#finder-mode", Static).update(event.label)
            finder_input = self.query_one("#finder-input", Input)
            finder_input.placeholder = event.placeholder
            finder_input.value = ""
        except Exception:
            return  # Not composed yet
        self.selected_index = 0
        self._update_results()

    def _on_index_rebuilt(self, event: IndexRebuiltEvent) -> None:
        try:
            self.query_one("#finder-status", Static).update(f"Indexed {event.file_count} files")
        except Exception:
            pass

    def _update_results(self) -> None:
        """Rebuild the results list."""
        self._updating = True
        try:
            results = self._orchestrator.results
            container = self.query_one("#results", Vertical)
            container.remove_children()
            self.query_one("#finder-status", Static).update(f"{len(results)} results")

            if not results:
                container.mount(Static("no matches", classes="no-results"))
                return

            for i, result in enumerate(results):
                item = ResultItem(result, classes="result-row")
                if i == self.selected_index:
                    item.add_class("selected")
                container.mount(item)
        finally:
            self._updating = False

    def watch_selected_index(self, new_index: int) -> None:
        """Update visual selection."""
        if self._updating:
            return  # Skip during DOM rebuild
        try:
            container = self.query_one("#results", Vertical)
        except Exception:
            return
        for i, child in enumerate(container.children):
            if isinstance(child, ResultItem):
                child.set_class(i == new_index, "selected")

    def action_move_down(self) -> None:
        """Move selection down."""
        count = len(self._orchestrator.results)
        if count:
            self.selected_index = min(self.selected_index + 1, count - 1)

    def action_move_up(self) -> None:
        """Move selection up."""
        if self._orchestrator.results:
            self.selected_index = max(self.selected_index - 1, 0)

    def action_next_mode(self) -> None:
        """Cycle to the next search mode."""
        current = MODE_CYCLE.index(self._orchestrator.mode)
        self._orchestrator.set_mode(MODE_CYCLE[(current + 1) % len(MODE_CYCLE)])
        self._orchestrator.search_now()

    def action_execute(self) -> None:
        """Resolve the selected result and dismiss."""
        # Flush so Enter right after typing acts on the latest query
        if self._orchestrator.search_pending:
            self._orchestrator.search_now()
        if not self._orchestrator.results:
            return
        index = min(self.selected_index, len(self._orchestrator.results) - 1)
        self.dismiss(self._orchestrator.select(index))

    def action_dismiss_modal(self) -> None:
        self._orchestrator.dismiss()
        self.dismiss(None)

    def on_click(self, event) -> None:
        """Open the clicked result."""
        widget = event.widget
        if isinstance(widget, ResultItem):
            results = list(self._orchestrator.results)
            if widget.result in results:
                self.selected_index = results.index(widget.result)
                self.action_execute()
