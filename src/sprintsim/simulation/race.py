"""Race simulation engine."""

import math

import numpy as np

from sprintsim.data.characters import CHARACTER_PROFILES
from sprintsim.logging_config import get_logger
from sprintsim.models import CharacterProfile, Checkpoint, RaceConfig, Racer
from sprintsim.simulation.checkpoints import AnswerOutcome, CheckpointGate
from sprintsim.simulation.competitors import CompetitorAI
from sprintsim.simulation.events import EventBus, EventType, RaceEvent
from sprintsim.simulation.physics import PlayerPhysics
from sprintsim.simulation.results import RaceResult, ResultsAggregator
from sprintsim.simulation.state import Countdown, RaceState, RaceStateMachine

logger = get_logger(__name__)


class RaceSimulator:
    """Runs one sprint race, headless, one step per host frame.

    The host drives everything: ``step(dt)`` once per frame (also while
    paused, so competitors keep moving) and ``tap``/``submit_answer``/
    ``restart`` for input. Notifications go out on ``bus``; the same inputs
    can also be published on the bus as TAP/RESTART/ANSWER_SUBMITTED.

    Notifications raised while the race mutates are queued and delivered
    once the call that produced them has finished updating state.
    """

    def __init__(
        self,
        config: RaceConfig | None = None,
        profiles: list[CharacterProfile] | None = None,
        rng: np.random.Generator | None = None,
        bus: EventBus | None = None,
    ):
        """Initialize and set up the first race.

        Args:
            config: Race configuration (defaults if None)
            profiles: Competitor pool (default roster if None)
            rng: Random number generator
            bus: Message channel to the host (new bus if None)

        Raises:
            ValueError: On invalid configuration
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.bus = bus if bus is not None else EventBus()
        self.profiles = list(profiles) if profiles is not None else list(CHARACTER_PROFILES)

        self.config = RaceConfig()
        self.physics = PlayerPhysics()
        self.gate = CheckpointGate()
        self.competitor_ai: CompetitorAI | None = None
        self.machine = RaceStateMachine(on_change=self._on_state_change)
        self.countdown = Countdown()
        self.aggregator = ResultsAggregator()

        self.player: Racer | None = None
        self.ai_racers: list[Racer] = []
        self.elapsed = 0.0
        self.active = False

        self._outbox: list[RaceEvent] = []
        self._unsubscribers: list = []

        self.init(config if config is not None else RaceConfig())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self, config: RaceConfig) -> None:
        """Apply a configuration and set up a fresh race in READY.

        Raises:
            ValueError: If the configuration cannot host a race
        """
        competitor_ai = CompetitorAI(self.profiles, config.competitors, rng=self.rng)
        needed_lanes = 1 + competitor_ai.roster_size
        if needed_lanes > config.track.lane_count:
            raise ValueError(
                f"track has {config.track.lane_count} lanes but the race needs {needed_lanes}"
            )

        self.config = config
        self.competitor_ai = competitor_ai
        self.physics = PlayerPhysics(config.physics)
        self.gate = CheckpointGate(config.physics)
        self.countdown = Countdown(config.countdown_interval)

        if not self.active:
            self._subscribe_inputs()
            self.active = True

        self._reset()

    def teardown(self) -> None:
        """Detach from the bus and drop all race entities."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._outbox = []
        self.player = None
        self.ai_racers = []
        self.aggregator.reset([])
        self.gate.reset([])
        self.active = False
        logger.info("race_teardown")

    def restart(self) -> None:
        """Discard the current race and set up a new one in READY.

        Safe from any state. Pending notifications of the old race are dropped.
        """
        if not self.active:
            return
        self._outbox = []
        self._reset()

    def _reset(self) -> None:
        track = self.config.track
        self.player = Racer(
            name=self.config.controlled_name,
            color=self.config.controlled_color,
            lane=0,
            is_controlled=True,
        )
        self.player.reset_race_state(track.start)
        self.ai_racers = self.competitor_ai.select(self.config.difficulty, first_lane=1)
        for racer in self.ai_racers:
            racer.position = track.start

        self.gate.reset(track.build_checkpoints(self.config.checkpoint_ratios))
        self.aggregator.reset(self.racers)
        self.countdown.reset()
        self.elapsed = 0.0
        self.machine.reset()
        self._flush()

    # ------------------------------------------------------------------
    # Host inputs
    # ------------------------------------------------------------------

    def tap(self) -> None:
        """Start the countdown from READY, or boost the racer while RACING."""
        if not self.active:
            return
        state = self.machine.state
        if state == RaceState.READY:
            self.machine.transition(RaceState.COUNTDOWN)
            self._emit(EventType.COUNTDOWN_TICK, count=self.countdown.start())
        elif state == RaceState.RACING:
            self.physics.apply_tap(self.player)
        else:
            logger.debug("tap_ignored", state=state.value)
        self._flush()

    def submit_answer(self, correct: bool, time_taken_ms: float) -> None:
        """Resume from a checkpoint quiz; ignored unless PAUSED."""
        if not self.active:
            return
        if self.machine.state != RaceState.PAUSED:
            logger.debug("answer_ignored", state=self.machine.state.value)
            return
        outcome = AnswerOutcome(correct=bool(correct), time_taken_ms=float(time_taken_ms))
        self.gate.resolve(self.player, outcome)
        self.machine.transition(RaceState.RACING)
        self._flush()

    # ------------------------------------------------------------------
    # Simulation step
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Advance the race by ``dt`` seconds.

        Raises:
            ValueError: If ``dt`` is negative or not finite
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"step delta must be a finite, non-negative number of seconds, got {dt}")
        if not self.active or dt == 0:
            return

        state = self.machine.state
        if state == RaceState.COUNTDOWN:
            self._advance_countdown(dt)
        elif self.machine.is_moving:
            self._advance_race(dt)
        self._flush()

    def _advance_countdown(self, dt: float) -> None:
        for count in self.countdown.advance(dt):
            self._emit(EventType.COUNTDOWN_TICK, count=count)
        if self.countdown.done:
            self.machine.transition(RaceState.RACING)
            self._emit(EventType.RACE_STARTED)

    def _advance_race(self, dt: float) -> None:
        track = self.config.track
        step_start_ms = self.elapsed_ms
        self.elapsed += dt
        crossings: list[tuple[Racer, float]] = []

        # Controlled racer first: physics, then checkpoint, then finish
        if self.machine.state == RaceState.RACING and not self.player.has_finished:
            previous = self.physics.integrate(self.player, dt, track)
            checkpoint = self.gate.evaluate(self.player)
            if checkpoint is not None:
                self.machine.transition(RaceState.PAUSED)
                self._emit(EventType.QUIZ_REQUESTED, checkpoint_index=checkpoint.index)
            offset = self.physics.finish_offset(self.player, previous, dt, track)
            if offset is not None:
                crossings.append((self.player, offset))

        crossings.extend(self.competitor_ai.advance(self.ai_racers, dt, track))

        finishers = self.aggregator.record_finishes(crossings, step_start_ms)
        if not finishers:
            return

        if any(r.is_controlled for r in finishers):
            self.player.velocity = 0.0
            self._emit(EventType.FINISHED)

        all_finished = self.aggregator.all_finished
        self._emit(
            EventType.RESULTS_UPDATED,
            results=self.aggregator.partial_results(),
            all_finished=all_finished,
        )
        if all_finished:
            self.machine.transition(RaceState.FINISHED)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> RaceState:
        return self.machine.state

    @property
    def racers(self) -> list[Racer]:
        """Controlled racer first, then AI racers by lane."""
        if self.player is None:
            return []
        return [self.player, *self.ai_racers]

    @property
    def checkpoints(self) -> list[Checkpoint]:
        return sorted(self.gate.checkpoints, key=lambda c: c.index)

    @property
    def elapsed_ms(self) -> float:
        """Race clock since the start signal; keeps running while paused."""
        return self.elapsed * 1000.0

    @property
    def all_finished(self) -> bool:
        return self.aggregator.all_finished

    def partial_results(self) -> list[RaceResult]:
        return self.aggregator.partial_results()

    def complete_results(self) -> list[RaceResult]:
        return self.aggregator.complete_results()

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    def _on_state_change(self, state: RaceState, previous: RaceState | None) -> None:
        self._emit(EventType.STATE_CHANGED, state=state, previous=previous)

    def _emit(self, event_type: EventType, **payload) -> None:
        self._outbox.append(RaceEvent(event_type=event_type, payload=payload, elapsed_ms=self.elapsed_ms))

    def _flush(self) -> None:
        while self._outbox:
            self.bus.publish(self._outbox.pop(0))

    def _subscribe_inputs(self) -> None:
        handlers = {
            EventType.TAP: lambda event: self.tap(),
            EventType.RESTART: lambda event: self.restart(),
            EventType.ANSWER_SUBMITTED: lambda event: self.submit_answer(
                event.payload.get("correct", False),
                event.payload.get("time_taken_ms", 0.0),
            ),
        }
        self._unsubscribers = [self.bus.subscribe(t, h) for t, h in handlers.items()]
