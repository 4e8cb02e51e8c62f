"""Tests for EventBus."""

import gc

from quick_open.services.events import (
    CommandChosenEvent,
    EventBus,
    FileChosenEvent,
    ResultCountChangedEvent,
)


class TestEventBus:
    """Tests for EventBus."""

    def test_singleton(self, bus):
        assert EventBus.get() is bus
        EventBus.reset()
        assert EventBus.get() is not bus

    def test_emit_to_subscriber(self, bus):
        received = []
        bus.subscribe(CommandChosenEvent, received.append)
        bus.emit(CommandChosenEvent(action_id="openFile"))
        assert [e.action_id for e in received] == ["openFile"]

    def test_only_matching_type(self, bus):
        received = []
        bus.subscribe(FileChosenEvent, received.append)
        bus.emit(ResultCountChangedEvent(count=3))
        assert received == []

    def test_duplicate_subscribe_ignored(self, bus):
        received = []
        bus.subscribe(ResultCountChangedEvent, received.append)
        bus.subscribe(ResultCountChangedEvent, received.append)
        bus.emit(ResultCountChangedEvent(count=1))
        assert len(received) == 1

    def test_unsubscribe(self, bus):
        received = []
        bus.subscribe(ResultCountChangedEvent, received.append)
        bus.unsubscribe(ResultCountChangedEvent, received.append)
        bus.emit(ResultCountChangedEvent(count=1))
        assert received == []
        assert bus.subscriber_count(ResultCountChangedEvent) == 0

    def test_failing_handler_does_not_block_others(self, bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(ResultCountChangedEvent, broken)
        bus.subscribe(ResultCountChangedEvent, received.append)
        bus.emit(ResultCountChangedEvent(count=2))
        assert [e.count for e in received] == [2]

    def test_weak_subscription_dropped_with_owner(self, bus):
        received = []

        class Listener:
            def on_count(self, event):
                received.append(event.count)

        listener = Listener()
        bus.subscribe(ResultCountChangedEvent, listener.on_count, weak=True)
        bus.emit(ResultCountChangedEvent(count=1))
        assert received == [1]

        del listener
        gc.collect()
        bus.emit(ResultCountChangedEvent(count=2))
        assert received == [1]
        assert bus.subscriber_count(ResultCountChangedEvent) == 0

    def test_clear(self, bus):
        bus.subscribe(FileChosenEvent, lambda e: None)
        bus.clear()
        assert bus.subscriber_count(FileChosenEvent) == 0
