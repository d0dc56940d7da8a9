"""Tests for the publish/subscribe channel."""

import pytest

from sprintsim.simulation import EventBus, EventType, RaceEvent
from sprintsim.simulation.events import INPUT_EVENTS


class TestEventBus:
    """Tests for subscription and delivery."""

    def test_delivers_to_matching_handlers_only(self):
        bus = EventBus()
        taps, restarts = [], []
        bus.subscribe(EventType.TAP, taps.append)
        bus.subscribe(EventType.RESTART, restarts.append)

        bus.emit(EventType.TAP)

        assert len(taps) == 1
        assert taps[0].event_type == EventType.TAP
        assert restarts == []

    def test_payload_access(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.ANSWER_SUBMITTED, received.append)

        bus.emit(EventType.ANSWER_SUBMITTED, elapsed_ms=1500.0, correct=True, time_taken_ms=900)

        event = received[0]
        assert event["correct"] is True
        assert event["time_taken_ms"] == 900
        assert event.elapsed_ms == 1500.0

    def test_unsubscribe_callable(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.TAP, received.append)
        unsubscribe()
        bus.emit(EventType.TAP)
        assert received == []
        assert bus.handler_count(EventType.TAP) == 0

    def test_unsubscribe_during_publish(self):
        bus = EventBus()
        calls = []

        def once(event):
            calls.append("once")
            unsubscribe()

        unsubscribe = bus.subscribe(EventType.TAP, once)
        bus.subscribe(EventType.TAP, lambda e: calls.append("always"))

        bus.emit(EventType.TAP)
        bus.emit(EventType.TAP)

        assert calls == ["once", "always", "always"]

    def test_rejects_unknown_event_types(self):
        with pytest.raises(TypeError):
            EventBus().subscribe("tap", lambda e: None)

    def test_history(self):
        bus = EventBus(keep_history=True)
        bus.publish(RaceEvent(EventType.TAP))
        bus.publish(RaceEvent(EventType.FINISHED))

        assert [e.event_type for e in bus.history] == [EventType.TAP, EventType.FINISHED]
        assert len(bus.events_of(EventType.FINISHED)) == 1

        bus.clear_history()
        assert bus.history == []

    def test_no_history_by_default(self):
        bus = EventBus()
        bus.emit(EventType.TAP)
        assert bus.history == []

    def test_input_events(self):
        assert INPUT_EVENTS == {EventType.TAP, EventType.RESTART, EventType.ANSWER_SUBMITTED}
