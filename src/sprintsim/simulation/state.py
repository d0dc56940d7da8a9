"""Race state machine and pre-race countdown."""

from collections.abc import Callable
from enum import Enum

from sprintsim.exceptions import InvalidTransitionError
from sprintsim.logging_config import get_logger

logger = get_logger(__name__)


class RaceState(str, Enum):
    """Race phases."""

    READY = "ready"
    COUNTDOWN = "countdown"
    RACING = "racing"
    PAUSED = "paused"
    FINISHED = "finished"


# Restart (any -> READY) is handled by reset(), not listed here
TRANSITIONS: dict[RaceState, frozenset[RaceState]] = {
    RaceState.READY: frozenset({RaceState.COUNTDOWN}),
    RaceState.COUNTDOWN: frozenset({RaceState.RACING}),
    RaceState.RACING: frozenset({RaceState.PAUSED, RaceState.FINISHED}),
    RaceState.PAUSED: frozenset({RaceState.RACING, RaceState.FINISHED}),
    RaceState.FINISHED: frozenset(),
}

StateListener = Callable[[RaceState, RaceState | None], None]


class RaceStateMachine:
    """Authoritative race phase; every change is reported to the listener."""

    def __init__(self, on_change: StateListener | None = None):
        """Initialize in READY.

        Args:
            on_change: Called with (new_state, previous_state) after each change
        """
        self.state = RaceState.READY
        self.on_change = on_change

    def can_transition(self, target: RaceState) -> bool:
        return target in TRANSITIONS[self.state]

    def transition(self, target: RaceState) -> None:
        """Move to ``target``.

        Raises:
            InvalidTransitionError: If the move is not in the transition table
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self.state.value, target.value)
        self._set(target)

    def reset(self) -> None:
        """Return to READY from any state, always reporting the change."""
        self._set(RaceState.READY)

    @property
    def is_moving(self) -> bool:
        """Whether competitors move (racing or paused)."""
        return self.state in (RaceState.RACING, RaceState.PAUSED)

    def _set(self, target: RaceState) -> None:
        previous = self.state
        self.state = target
        logger.info("state_changed", state=target.value, previous=previous.value)
        if self.on_change is not None:
            self.on_change(target, previous)


class Countdown:
    """Fixed 3-2-1-go sequence driven by stepped time.

    Tick 3 fires on :meth:`start`; ticks 2, 1 and 0 ("go") follow one
    ``interval`` apart.
    """

    START = 3

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self.count: int | None = None
        self.timer = 0.0

    @property
    def running(self) -> bool:
        return self.count is not None and self.count > 0

    @property
    def done(self) -> bool:
        return self.count == 0

    def reset(self) -> None:
        self.count = None
        self.timer = 0.0

    def start(self) -> int:
        """Begin the sequence and return the first tick."""
        self.count = self.START
        self.timer = 0.0
        return self.count

    def advance(self, dt: float) -> list[int]:
        """Consume ``dt`` seconds and return the ticks that fell due."""
        ticks: list[int] = []
        if not self.running:
            return ticks
        self.timer += dt
        while self.running and self.timer >= self.interval:
            self.timer -= self.interval
            self.count -= 1
            ticks.append(self.count)
        return ticks
