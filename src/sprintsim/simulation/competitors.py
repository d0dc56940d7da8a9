"""AI competitor selection and movement."""

import numpy as np

from sprintsim.logging_config import get_logger
from sprintsim.models import CharacterProfile, CompetitorConfig, Racer, TrackGeometry

logger = get_logger(__name__)


class CompetitorAI:
    """Moves every non-controlled racer at a drifting, bounded speed.

    AI racers ignore checkpoints and keep moving while the controlled racer
    is paused at a quiz.
    """

    def __init__(
        self,
        profiles: list[CharacterProfile],
        config: CompetitorConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the competitor model.

        Args:
            profiles: Pool of characters to draw competitors from
            config: Selection size and drift tuning
            rng: Random number generator

        Raises:
            ValueError: If the profile pool is empty or has duplicate ids
        """
        if not profiles:
            raise ValueError("competitor pool is empty; at least one character profile is required")
        ids = [p.id for p in profiles]
        if len(set(ids)) != len(ids):
            raise ValueError(f"competitor pool has duplicate profile ids: {ids}")

        self.profiles = list(profiles)
        self.config = config if config is not None else CompetitorConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.drift_timer = 0.0

    @property
    def roster_size(self) -> int:
        """Number of AI racers each race gets."""
        return min(self.config.count, len(self.profiles))

    def select(self, difficulty: float = 1.0, first_lane: int = 1) -> list[Racer]:
        """Pick a fresh roster with randomized starting speeds.

        Args:
            difficulty: Global speed multiplier
            first_lane: Lane given to the first competitor; the rest follow

        Returns:
            New AI racers, one per lane
        """
        self.drift_timer = 0.0
        chosen = self.rng.choice(len(self.profiles), size=self.roster_size, replace=False)

        racers = []
        for offset, profile_idx in enumerate(chosen):
            profile = self.profiles[int(profile_idx)]
            racer = Racer.from_profile(profile, lane=first_lane + offset, difficulty=difficulty)
            racer.speed = self.sample_speed(racer)
            racers.append(racer)

        logger.debug(
            "competitors_selected",
            roster=[r.profile_id for r in racers],
            speeds=[round(r.speed, 2) for r in racers],
        )
        return racers

    def sample_speed(self, racer: Racer) -> float:
        """Uniform speed inside the racer's band."""
        return float(self.rng.uniform(racer.min_speed, racer.max_speed))

    def advance(
        self,
        racers: list[Racer],
        dt: float,
        track: TrackGeometry,
    ) -> list[tuple[Racer, float]]:
        """Move every unfinished AI racer and apply periodic pace drift.

        Args:
            racers: AI racers
            dt: Step length in seconds
            track: Track bounds

        Returns:
            (racer, seconds into the step) for each racer that reached the finish
        """
        crossings: list[tuple[Racer, float]] = []

        for racer in racers:
            if racer.has_finished:
                continue
            previous = racer.position
            racer.position = track.clamp(previous + racer.speed * dt)
            if racer.position >= track.finish > previous:
                offset = (track.finish - previous) / racer.speed if racer.speed > 0 else dt
                crossings.append((racer, min(dt, offset)))

        self.drift_timer += dt
        while self.drift_timer >= self.config.drift_interval:
            self.drift_timer -= self.config.drift_interval
            self._drift(racers)

        return crossings

    def _drift(self, racers: list[Racer]) -> None:
        """Nudge each running racer's speed and clamp it back into its band."""
        for racer in racers:
            if racer.has_finished:
                continue
            band = racer.max_speed - racer.min_speed
            delta = self.rng.uniform(-1.0, 1.0) * self.config.drift_fraction * band
            racer.speed = float(np.clip(racer.speed + delta, racer.min_speed, racer.max_speed))
