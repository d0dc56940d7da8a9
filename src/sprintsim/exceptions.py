"""Exceptions raised by the race core."""


class SprintSimError(Exception):
    """Base class for sprintsim errors."""


class InvalidTransitionError(SprintSimError):
    """A state transition that the race state machine does not allow."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"cannot transition from {current!r} to {target!r}")


class ResultsNotReadyError(SprintSimError):
    """Complete results were requested before every racer finished."""
