"""Tests for the event bus."""

from moodlight.core.events import Event, EventBus, EventType


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(EventType.TAP, seen.append)

    bus.emit(Event(EventType.TAP))
    unsubscribe()
    bus.emit(Event(EventType.TAP))

    assert len(seen) == 1


def test_global_handlers_see_everything():
    bus = EventBus()
    seen = []
    bus.subscribe_all(lambda event: seen.append(event.type))

    bus.emit(Event(EventType.FLASH_STARTED))
    bus.emit(Event(EventType.FLASH_ENDED))

    assert seen == [EventType.FLASH_STARTED, EventType.FLASH_ENDED]


def test_failing_handler_does_not_block_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.TAP, broken)
    bus.subscribe(EventType.TAP, seen.append)
    bus.emit(Event(EventType.TAP))

    assert len(seen) == 1


def test_history_is_bounded_and_filterable():
    bus = EventBus(history_limit=3)
    for _ in range(5):
        bus.emit(Event(EventType.TAP))
    bus.emit(Event(EventType.SHUTDOWN))

    assert len(bus.get_history(limit=10)) == 3
    assert len(bus.get_history(EventType.SHUTDOWN)) == 1

    bus.clear_history()
    assert bus.get_history() == []
