"""Racer and character profile models."""

from pydantic import BaseModel, Field, model_validator

# Roster-wide speed tuning. SPEED_SCALE scales every profile's base speeds,
# VARIANCE_FACTOR lowers the minimum further to widen the pace band.
SPEED_SCALE = 0.7
VARIANCE_FACTOR = 0.5


class CharacterProfile(BaseModel):
    """A selectable AI competitor with a base pace band (track units per second)."""

    id: str = Field(..., description="Unique character identifier (e.g., 'daddy')")
    name: str = Field(..., description="Display name")
    color: int = Field(..., ge=0, le=0xFFFFFF, description="Display color as 0xRRGGBB")
    base_min_speed: float = Field(..., gt=0, description="Minimum speed before scaling")
    base_max_speed: float = Field(..., gt=0, description="Maximum speed before scaling")
    role: str = Field(default="", description="Flavor text shown by hosts")

    @model_validator(mode="after")
    def _check_band(self) -> "CharacterProfile":
        if self.base_min_speed > self.base_max_speed:
            raise ValueError(
                f"{self.id}: base_min_speed {self.base_min_speed} exceeds "
                f"base_max_speed {self.base_max_speed}"
            )
        return self

    @property
    def min_speed(self) -> float:
        """Effective minimum speed after roster scaling and variance."""
        return self.base_min_speed * SPEED_SCALE * (1.0 - VARIANCE_FACTOR)

    @property
    def max_speed(self) -> float:
        """Effective maximum speed after roster scaling."""
        return self.base_max_speed * SPEED_SCALE

    def speed_bounds(self, difficulty: float = 1.0) -> tuple[float, float]:
        """Speed band for a race at the given difficulty multiplier."""
        return self.min_speed * difficulty, self.max_speed * difficulty


class Racer(BaseModel):
    """A single entrant in a race.

    The controlled racer moves by ``velocity``; AI racers move by ``speed``,
    which drifts inside ``[min_speed, max_speed]``.
    """

    name: str = Field(..., description="Display name")
    color: int = Field(default=0xFF69B4, description="Display color as 0xRRGGBB")
    lane: int = Field(..., ge=0, description="Lane index (controlled racer is lane 0)")
    is_controlled: bool = Field(default=False, description="True for the tap-driven racer")
    profile_id: str | None = Field(default=None, description="Character profile for AI racers")

    # AI pace band
    min_speed: float = Field(default=0.0, ge=0.0, description="Lower speed bound")
    max_speed: float = Field(default=0.0, ge=0.0, description="Upper speed bound")

    # Race state (mutable during simulation)
    position: float = Field(default=0.0, description="Distance from the start line")
    velocity: float = Field(default=0.0, description="Controlled racer velocity")
    speed: float = Field(default=0.0, description="AI racer speed")
    finish_time_ms: float | None = Field(default=None, description="Race clock at finish")
    finish_position: int | None = Field(default=None, description="1-based finishing rank")

    @property
    def has_finished(self) -> bool:
        return self.finish_position is not None

    def reset_race_state(self, start: float = 0.0) -> None:
        """Reset mutable state for a new race."""
        self.position = start
        self.velocity = 0.0
        self.speed = 0.0
        self.finish_time_ms = None
        self.finish_position = None

    @classmethod
    def from_profile(
        cls,
        profile: CharacterProfile,
        lane: int,
        difficulty: float = 1.0,
    ) -> "Racer":
        """Create an AI racer for a character profile."""
        low, high = profile.speed_bounds(difficulty)
        return cls(
            name=profile.name,
            color=profile.color,
            lane=lane,
            profile_id=profile.id,
            min_speed=low,
            max_speed=high,
        )
