"""Checkpoint gating: pause the controlled racer for a quiz, resume with a boost."""

from dataclasses import dataclass

from sprintsim.logging_config import get_logger
from sprintsim.models import Checkpoint, PhysicsConfig, Racer

logger = get_logger(__name__)


@dataclass
class AnswerOutcome:
    """What the host reports after the quiz; problem content never reaches the core."""

    correct: bool
    time_taken_ms: float


class CheckpointGate:
    """Detects checkpoint arrivals and applies answer boosts."""

    def __init__(self, config: PhysicsConfig | None = None):
        """Initialize the gate.

        Args:
            config: Provides the answer boosts and fast-answer threshold
        """
        self.config = config if config is not None else PhysicsConfig()
        self.checkpoints: list[Checkpoint] = []
        self.pending: Checkpoint | None = None

    def reset(self, checkpoints: list[Checkpoint]) -> None:
        """Install a fresh set of unpassed checkpoints for a new race."""
        self.checkpoints = sorted(checkpoints, key=lambda c: c.position)
        self.pending = None

    @property
    def passed(self) -> list[bool]:
        return [c.passed for c in sorted(self.checkpoints, key=lambda c: c.index)]

    def next_checkpoint(self) -> Checkpoint | None:
        """The nearest checkpoint not yet passed."""
        for checkpoint in self.checkpoints:
            if not checkpoint.passed:
                return checkpoint
        return None

    def evaluate(self, racer: Racer) -> Checkpoint | None:
        """Check whether the racer has reached the next unpassed checkpoint.

        A racer that overshoots is placed on the checkpoint, so a single
        long step can never skip past a quiz.

        Returns:
            The checkpoint reached, or None
        """
        checkpoint = self.next_checkpoint()
        if checkpoint is None or racer.position < checkpoint.position:
            return None

        checkpoint.mark_passed()
        racer.position = checkpoint.position
        racer.velocity = 0.0
        self.pending = checkpoint
        logger.info(
            "checkpoint_reached",
            checkpoint_index=checkpoint.index,
            position=round(checkpoint.position, 2),
        )
        return checkpoint

    def resolve(self, racer: Racer, outcome: AnswerOutcome) -> float:
        """Apply the resumption velocity for an answer.

        Correct and quicker than the threshold earns the fast boost, correct
        but slower earns the slow boost, and a wrong answer leaves the racer
        standing.

        Returns:
            The racer's new velocity
        """
        if outcome.correct:
            if outcome.time_taken_ms < self.config.fast_answer_threshold_ms:
                racer.velocity = self.config.fast_answer_boost
            else:
                racer.velocity = self.config.slow_answer_boost
        else:
            racer.velocity = 0.0

        logger.info(
            "checkpoint_answered",
            checkpoint_index=self.pending.index if self.pending else None,
            correct=outcome.correct,
            time_taken_ms=outcome.time_taken_ms,
            velocity=racer.velocity,
        )
        self.pending = None
        return racer.velocity
