"""Tap-driven velocity integration for the controlled racer."""

from sprintsim.models import PhysicsConfig, Racer, TrackGeometry


class PlayerPhysics:
    """Turns taps into velocity, decays it by friction and integrates position.

    Friction is expressed per nominal frame; a step of ``dt`` seconds applies
    ``friction ** (dt / nominal_frame_seconds)`` so decay per unit of time is
    the same at any frame rate.
    """

    def __init__(self, config: PhysicsConfig | None = None):
        """Initialize the integrator.

        Args:
            config: Velocity tuning (defaults if None)
        """
        self.config = config if config is not None else PhysicsConfig()

    def apply_tap(self, racer: Racer) -> float:
        """Add one tap boost, capped at the maximum velocity.

        Returns:
            The racer's new velocity
        """
        if racer.has_finished:
            return racer.velocity
        racer.velocity = min(racer.velocity + self.config.tap_boost, self.config.max_velocity)
        return racer.velocity

    def decay(self, velocity: float, dt: float) -> float:
        """Velocity after ``dt`` seconds of friction, snapped to zero when tiny."""
        factor = self.config.friction ** (dt / self.config.nominal_frame_seconds)
        velocity *= factor
        if abs(velocity) < self.config.velocity_epsilon:
            return 0.0
        return velocity

    def integrate(self, racer: Racer, dt: float, track: TrackGeometry) -> float:
        """Advance the racer by one step.

        Args:
            racer: Controlled racer
            dt: Step length in seconds
            track: Track bounds for clamping

        Returns:
            The racer's position before the step
        """
        previous = racer.position
        racer.velocity = self.decay(racer.velocity, dt)
        if racer.velocity > 0:
            racer.position = track.clamp(racer.position + racer.velocity * dt)
        return previous

    @staticmethod
    def finish_offset(
        racer: Racer,
        previous: float,
        dt: float,
        track: TrackGeometry,
    ) -> float | None:
        """Seconds into the step at which the racer reached the finish line.

        Returns None when the finish was not reached during this step.
        """
        if racer.position < track.finish or previous >= track.finish:
            return None
        if racer.velocity <= 0:
            return dt
        return min(dt, (track.finish - previous) / racer.velocity)
