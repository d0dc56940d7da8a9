"""Race messages and the publish/subscribe bus between the core and its host."""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """The closed set of messages exchanged with the host."""

    # Host -> core
    TAP = "tap"
    RESTART = "restart"
    ANSWER_SUBMITTED = "answer_submitted"

    # Core -> host
    STATE_CHANGED = "state_changed"
    COUNTDOWN_TICK = "countdown_tick"
    RACE_STARTED = "race_started"
    QUIZ_REQUESTED = "quiz_requested"
    RESULTS_UPDATED = "results_updated"
    FINISHED = "finished"


INPUT_EVENTS = frozenset({EventType.TAP, EventType.RESTART, EventType.ANSWER_SUBMITTED})


@dataclass
class RaceEvent:
    """A message on the bus.

    Payload keys per type:
        STATE_CHANGED: state, previous
        COUNTDOWN_TICK: count (3, 2, 1, 0 where 0 is "go")
        QUIZ_REQUESTED: checkpoint_index
        RESULTS_UPDATED: results, all_finished
        ANSWER_SUBMITTED: correct, time_taken_ms
    """

    event_type: EventType
    payload: dict[str, Any] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]


Handler = Callable[[RaceEvent], None]


class EventBus:
    """Synchronous publish/subscribe channel keyed by :class:`EventType`."""

    def __init__(self, keep_history: bool = False):
        """Initialize the bus.

        Args:
            keep_history: Record every published event in ``history``
        """
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self.keep_history = keep_history
        self.history: list[RaceEvent] = []

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """Register a handler and return a callable that removes it."""
        if not isinstance(event_type, EventType):
            raise TypeError(f"unknown event type: {event_type!r}")
        self._handlers[event_type].append(handler)
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: RaceEvent) -> None:
        """Deliver an event to every handler subscribed to its type."""
        if self.keep_history:
            self.history.append(event)
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event.event_type, [])):
            handler(event)

    def emit(self, event_type: EventType, elapsed_ms: float = 0.0, **payload: Any) -> RaceEvent:
        """Build and publish an event in one call."""
        event = RaceEvent(event_type=event_type, payload=payload, elapsed_ms=elapsed_ms)
        self.publish(event)
        return event

    def events_of(self, event_type: EventType) -> list[RaceEvent]:
        """Recorded events of one type (requires ``keep_history``)."""
        return [e for e in self.history if e.event_type == event_type]

    def clear_history(self) -> None:
        self.history = []

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))
