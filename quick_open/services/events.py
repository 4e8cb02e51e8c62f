"""EventBus: decoupled finder-to-host communication.

The orchestrator emits domain events; the host and the presenter subscribe
to the ones they need.

Usage:
    # In the host (react to selections)
    bus = EventBus.get()
    bus.subscribe(FileChosenEvent, self._open_file)

    # In the presenter (redraw on new results)
    bus.subscribe(ResultsUpdatedEvent, self._on_results)

    # Cleanup on unmount
    bus.unsubscribe(ResultsUpdatedEvent, self._on_results)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, TypeVar
import inspect
import logging
import weakref

from ..models.search import SearchMode

logger = logging.getLogger(__name__)

# Event type variable for generic typing
E = TypeVar("E", bound="Event")


@dataclass
class Event:
    """Base class for all domain events."""

    timestamp: datetime = field(default_factory=datetime.now)


# Selection events (exactly one fires per completed selection)


@dataclass
class FileChosenEvent(Event):
    """Emitted when a file is chosen in file mode."""

    path: Path | None = None


@dataclass
class ContentChosenEvent(Event):
    """Emitted when a content hit is chosen."""

    path: Path | None = None
    line_number: int = 0


@dataclass
class CommandChosenEvent(Event):
    """Emitted when a command is chosen."""

    action_id: str = ""


@dataclass
class BufferChosenEvent(Event):
    """Emitted when an open buffer is chosen."""

    path: Path | None = None


# Search lifecycle events


@dataclass
class ResultCountChangedEvent(Event):
    """Emitted when a new result set is published."""

    count: int = 0


@dataclass
class ResultsUpdatedEvent(Event):
    """Emitted when the ranked result list is replaced."""

    mode: SearchMode = SearchMode.FILE
    query: str = ""
    count: int = 0


@dataclass
class ModeChangedEvent(Event):
    """Emitted when the active search mode switches."""

    mode: SearchMode = SearchMode.FILE
    label: str = ""
    placeholder: str = ""


@dataclass
class IndexRebuiltEvent(Event):
    """Emitted after the file index is (re)built for a root."""

    root: Path | None = None
    file_count: int = 0


@dataclass
class FinderDismissedEvent(Event):
    """Emitted when the finder is closed, with or without a selection."""

    mode: SearchMode = SearchMode.FILE


Handler = Callable[[Event], None]


class _Subscription:
    """One handler registration, held strongly or through a weak reference."""

    __slots__ = ("_target", "weak")

    def __init__(self, handler: Handler, weak: bool) -> None:
        self.weak = weak
        if not weak:
            self._target = handler
        elif inspect.ismethod(handler):
            self._target = weakref.WeakMethod(handler)
        else:
            self._target = weakref.ref(handler)

    def resolve(self) -> Handler | None:
        """The live handler, or None once a weak target is collected."""
        return self._target() if self.weak else self._target

    def matches(self, handler: Handler) -> bool:
        return self.resolve() == handler


class EventBus:
    """Process-wide publish/subscribe hub for finder events.

    One instance per application (see get()). Delivery is synchronous, on
    the emitting thread, in subscription order.
    """

    _instance: EventBus | None = None

    def __init__(self) -> None:
        self._subscriptions: dict[type[Event], list[_Subscription]] = {}

    @classmethod
    def get(cls) -> EventBus:
        """Return the shared bus, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the shared bus so the next get() starts empty."""
        cls._instance = None

    def subscribe(
        self,
        event_type: type[E],
        handler: Callable[[E], None],
        weak: bool = False,
    ) -> None:
        """Register handler for events of exactly event_type.

        Args:
            event_type: Event class to listen for
            handler: Called with each emitted event
            weak: Drop the registration once the handler's owner is collected
        """
        subscriptions = self._subscriptions.setdefault(event_type, [])
        if any(s.matches(handler) for s in subscriptions):
            return
        subscriptions.append(_Subscription(handler, weak))

    def unsubscribe(
        self,
        event_type: type[E],
        handler: Callable[[E], None],
    ) -> None:
        """Remove handler from event_type; unknown handlers are ignored."""
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            self._subscriptions[event_type] = [s for s in subscriptions if not s.matches(handler)]

    def emit(self, event: Event) -> None:
        """Deliver event to every live subscriber of its type.

        A failing handler is logged and skipped; the rest still run.
        """
        event_type = type(event)
        # Snapshot so handlers may (un)subscribe during delivery
        for subscription in list(self._subscriptions.get(event_type, ())):
            handler = subscription.resolve()
            if handler is not None:
                self._deliver(handler, event)
        self._prune(event_type)

    def _deliver(self, handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Event handler error for {type(event).__name__}: {e}")

    def _prune(self, event_type: type[Event]) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            self._subscriptions[event_type] = [s for s in subscriptions if s.resolve() is not None]

    def subscriber_count(self, event_type: type[Event]) -> int:
        """Number of live handlers for event_type."""
        return sum(1 for s in self._subscriptions.get(event_type, ()) if s.resolve() is not None)

    def clear(self) -> None:
        """Drop every subscription."""
        self._subscriptions.clear()
