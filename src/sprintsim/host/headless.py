"""Headless host: drives a race with a scripted player."""

import numpy as np
from pydantic import BaseModel, Field

from sprintsim.host.audio import AudioKey, AudioSink, NullAudio
from sprintsim.host.quiz import ArithmeticQuizProvider, MathProblem, QuizProvider
from sprintsim.logging_config import get_logger
from sprintsim.simulation.events import EventType, RaceEvent
from sprintsim.simulation.race import RaceSimulator
from sprintsim.simulation.results import RaceResult
from sprintsim.simulation.state import RaceState

logger = get_logger(__name__)


class TapScript(BaseModel):
    """How the simulated player behaves."""

    taps_per_second: float = Field(default=6.0, ge=0.0, description="Steady tapping rate")
    accuracy: float = Field(default=0.8, ge=0.0, le=1.0, description="Chance of a correct answer")
    answer_time_mean_ms: float = Field(default=2500.0, ge=0.0, description="Mean time to answer")
    answer_time_std_ms: float = Field(default=1000.0, ge=0.0, description="Answer time spread")
    min_answer_time_ms: float = Field(default=400.0, ge=0.0, description="Fastest possible answer")
    stumble_ms: float = Field(
        default=1000.0,
        ge=0.0,
        description="Taps are withheld this long after a wrong answer",
    )


class HeadlessHost:
    """Plays the host's role without a screen.

    Routes quiz requests to a quiz provider, answers after a sampled delay
    (competitors keep running meanwhile), taps at a steady rate and triggers
    sounds on the injected audio sink.
    """

    def __init__(
        self,
        simulator: RaceSimulator,
        script: TapScript | None = None,
        quiz: QuizProvider | None = None,
        audio: AudioSink | None = None,
        rng: np.random.Generator | None = None,
        fps: float = 60.0,
    ):
        """Initialize the host and subscribe to the race bus.

        Args:
            simulator: Race to drive
            script: Player behavior
            quiz: Problem provider (arithmetic if None)
            audio: Audio sink (silent if None)
            rng: Random number generator for player behavior
            fps: Frames per simulated second
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.simulator = simulator
        self.script = script if script is not None else TapScript()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.quiz = quiz if quiz is not None else ArithmeticQuizProvider(rng=self.rng)
        self.audio = audio if audio is not None else NullAudio()
        self.frame_seconds = 1.0 / fps

        self.problem: MathProblem | None = None
        self.checkpoint_index: int | None = None
        self.quiz_elapsed_ms = 0.0
        self.answer_due_ms = 0.0
        self.stumble_remaining_ms = 0.0
        self.tap_budget = 0.0
        # (checkpoint index, correct, answer time ms) per quiz answered
        self.quizzes: list[tuple[int | None, bool, float]] = []
        self.frames = 0

        bus = simulator.bus
        self._unsubscribers = [
            bus.subscribe(EventType.QUIZ_REQUESTED, self._on_quiz_requested),
            bus.subscribe(EventType.RACE_STARTED, self._on_race_started),
            bus.subscribe(EventType.FINISHED, self._on_finished),
            bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed),
        ]

    def close(self) -> None:
        """Stop listening to the race."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def run(self, max_seconds: float = 600.0) -> list[RaceResult]:
        """Race from READY to FINISHED.

        Args:
            max_seconds: Simulated-time cap; a race still running after this
                returns partial results

        Returns:
            Complete results, or partial ones if the cap was hit
        """
        sim = self.simulator
        if sim.state != RaceState.READY:
            sim.restart()
        self.frames = 0
        sim.tap()

        max_frames = int(max_seconds / self.frame_seconds)
        while sim.state != RaceState.FINISHED and self.frames < max_frames:
            self._frame()

        if sim.state != RaceState.FINISHED:
            logger.warning("race_cap_reached", frames=self.frames, elapsed_ms=sim.elapsed_ms)
            return sim.partial_results()
        return sim.complete_results()

    def _frame(self) -> None:
        sim = self.simulator
        dt = self.frame_seconds
        dt_ms = dt * 1000.0
        self.frames += 1

        if sim.state == RaceState.PAUSED and self.problem is not None:
            self.quiz_elapsed_ms += dt_ms
            if self.quiz_elapsed_ms >= self.answer_due_ms:
                self._answer()
        elif sim.state == RaceState.RACING:
            self._tap(dt, dt_ms)

        sim.step(dt)

    def _tap(self, dt: float, dt_ms: float) -> None:
        if self.stumble_remaining_ms > 0:
            self.stumble_remaining_ms = max(0.0, self.stumble_remaining_ms - dt_ms)
            return
        self.tap_budget += dt * self.script.taps_per_second
        while self.tap_budget >= 1.0:
            self.tap_budget -= 1.0
            self.audio.play_sfx(AudioKey.TAP)
            self.simulator.tap()

    def _answer(self) -> None:
        problem = self.problem
        if self.rng.random() < self.script.accuracy:
            choice = problem.answer
        else:
            wrong = [c for c in problem.choices if c != problem.answer]
            choice = wrong[int(self.rng.integers(len(wrong)))]
        correct = problem.check(choice)
        time_taken = self.quiz_elapsed_ms

        self.audio.play_sfx(AudioKey.CORRECT if correct else AudioKey.WRONG)
        if not correct:
            self.stumble_remaining_ms = self.script.stumble_ms
        self.quizzes.append((self.checkpoint_index, correct, time_taken))
        self.problem = None
        self.simulator.submit_answer(correct, time_taken)

    def _on_quiz_requested(self, event: RaceEvent) -> None:
        self.problem = self.quiz.generate()
        self.checkpoint_index = event["checkpoint_index"]
        self.quiz_elapsed_ms = 0.0
        sampled = self.rng.normal(self.script.answer_time_mean_ms, self.script.answer_time_std_ms)
        self.answer_due_ms = max(self.script.min_answer_time_ms, float(sampled))
        logger.debug(
            "quiz_shown",
            checkpoint_index=event["checkpoint_index"],
            question=self.problem.question,
        )

    def _on_race_started(self, event: RaceEvent) -> None:
        self.audio.play_music(AudioKey.RACE_MUSIC)

    def _on_finished(self, event: RaceEvent) -> None:
        self.audio.stop_music(fade=True)
        self.audio.play_sfx(AudioKey.FINISH)

    def _on_state_changed(self, event: RaceEvent) -> None:
        if event["state"] == RaceState.READY:
            self.problem = None
            self.tap_budget = 0.0
            self.stumble_remaining_ms = 0.0
            self.audio.stop_music(fade=False)
