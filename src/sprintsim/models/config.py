"""Race tuning configuration supplied by the host at construction."""

from pydantic import BaseModel, Field, field_validator

from .track import TrackGeometry


class PhysicsConfig(BaseModel):
    """Controlled racer velocity tuning."""

    tap_boost: float = Field(default=15.0, ge=0.0, description="Velocity added per tap")
    max_velocity: float = Field(default=300.0, gt=0.0, description="Velocity cap")
    friction: float = Field(
        default=0.98,
        gt=0.0,
        lt=1.0,
        description="Velocity multiplier per nominal frame (decay)",
    )
    nominal_frame_seconds: float = Field(
        default=1.0 / 60.0,
        gt=0.0,
        description="Frame length the friction factor is expressed against",
    )
    velocity_epsilon: float = Field(
        default=0.1,
        ge=0.0,
        description="Velocities below this snap to zero",
    )
    fast_answer_boost: float = Field(default=50.0, ge=0.0, description="Velocity after a fast correct answer")
    slow_answer_boost: float = Field(default=20.0, ge=0.0, description="Velocity after a slow correct answer")
    fast_answer_threshold_ms: float = Field(
        default=3000.0,
        gt=0.0,
        description="Correct answers quicker than this earn the fast boost",
    )

    @field_validator("fast_answer_boost", "slow_answer_boost", "tap_boost")
    @classmethod
    def _finite(cls, value: float) -> float:
        if value == float("inf"):
            raise ValueError("boost values must be finite")
        return value


class CompetitorConfig(BaseModel):
    """AI competitor selection and pace drift."""

    count: int = Field(default=5, ge=0, description="Maximum number of AI racers per race")
    drift_interval: float = Field(
        default=2.0,
        gt=0.0,
        description="Simulated seconds between speed nudges",
    )
    drift_fraction: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Max nudge as a fraction of the racer's speed band",
    )


class RaceConfig(BaseModel):
    """Everything a race needs at setup."""

    difficulty: float = Field(
        default=1.0,
        gt=0.0,
        description="Global multiplier on AI speeds",
    )
    checkpoint_ratios: tuple[float, ...] = Field(
        default=(1.0 / 3.0, 2.0 / 3.0),
        description="Checkpoint positions as fractions of track length",
    )
    countdown_interval: float = Field(
        default=1.0,
        gt=0.0,
        description="Seconds between countdown ticks",
    )
    controlled_name: str = Field(default="Rosie", description="Display name of the controlled racer")
    controlled_color: int = Field(default=0xFF69B4, ge=0, le=0xFFFFFF)
    track: TrackGeometry = Field(default_factory=TrackGeometry)
    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    competitors: CompetitorConfig = Field(default_factory=CompetitorConfig)

    @field_validator("checkpoint_ratios")
    @classmethod
    def _check_ratios(cls, ratios: tuple[float, ...]) -> tuple[float, ...]:
        for ratio in ratios:
            if not 0.0 < ratio < 1.0:
                raise ValueError(f"checkpoint ratio {ratio} must be strictly between 0 and 1")
        if any(b <= a for a, b in zip(ratios, ratios[1:])):
            raise ValueError(f"checkpoint ratios must be strictly increasing, got {ratios}")
        return ratios
