"""Track geometry: lanes, start/finish line and checkpoint positions."""

from pydantic import BaseModel, Field, field_validator


class Checkpoint(BaseModel):
    """A quiz gate on the track, only evaluated for the controlled racer."""

    index: int = Field(..., ge=0, description="Checkpoint order along the track")
    ratio: float = Field(..., gt=0.0, lt=1.0, description="Position as a fraction of track length")
    position: float = Field(..., ge=0.0, description="Absolute track position")
    passed: bool = Field(default=False, description="Whether the controlled racer has cleared it")

    def mark_passed(self) -> bool:
        """Flip to passed. Returns False if it was already passed."""
        if self.passed:
            return False
        self.passed = True
        return True


class TrackGeometry(BaseModel):
    """Straight sprint track measured from the start line.

    Positions are scalars in [start, finish]; the start line sits at 0.
    """

    length: float = Field(
        default=924.0,
        gt=0,
        description="Distance from start line to finish line",
    )
    lane_count: int = Field(
        default=6,
        ge=1,
        description="Number of parallel lanes, one racer per lane",
    )

    @property
    def start(self) -> float:
        return 0.0

    @property
    def finish(self) -> float:
        return self.length

    def position_at(self, ratio: float) -> float:
        """Absolute position for a fraction of track length."""
        return self.start + self.length * ratio

    def clamp(self, position: float) -> float:
        """Clamp a position onto the track."""
        return min(max(position, self.start), self.finish)

    def build_checkpoints(self, ratios: tuple[float, ...] | list[float]) -> list[Checkpoint]:
        """Create fresh (unpassed) checkpoints for the given ratios."""
        return [
            Checkpoint(index=i, ratio=ratio, position=self.position_at(ratio))
            for i, ratio in enumerate(ratios)
        ]

    @field_validator("length")
    @classmethod
    def _finite_length(cls, value: float) -> float:
        if value == float("inf"):
            raise ValueError("track length must be finite")
        return value
