"""Finish-position assignment and ranked result views."""

from dataclasses import asdict, dataclass
from typing import Any

from sprintsim.exceptions import ResultsNotReadyError
from sprintsim.logging_config import get_logger
from sprintsim.models import Racer

logger = get_logger(__name__)


@dataclass(frozen=True)
class RaceResult:
    """One racer's line in a result set."""

    name: str
    color: int
    finish_time_ms: float | None
    finish_position: int | None
    is_controlled: bool

    @classmethod
    def from_racer(cls, racer: Racer) -> "RaceResult":
        return cls(
            name=racer.name,
            color=racer.color,
            finish_time_ms=racer.finish_time_ms,
            finish_position=racer.finish_position,
            is_controlled=racer.is_controlled,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ResultsAggregator:
    """Hands out finish positions from one shared counter.

    ``racers`` is kept in stable order (controlled racer first, then lanes
    ascending); that order breaks ties between racers that reach the line at
    the same instant.
    """

    def __init__(self, racers: list[Racer] | None = None):
        self.racers: list[Racer] = []
        self.next_position = 1
        self.reset(racers or [])

    def reset(self, racers: list[Racer]) -> None:
        """Start a new race with a fresh counter."""
        self.racers = sorted(racers, key=lambda r: (not r.is_controlled, r.lane))
        self._order = {id(r): i for i, r in enumerate(self.racers)}
        self.next_position = 1

    def record_finishes(
        self,
        crossings: list[tuple[Racer, float]],
        step_start_ms: float,
    ) -> list[Racer]:
        """Assign finish positions for racers that reached the line this step.

        Args:
            crossings: (racer, seconds into the step) pairs
            step_start_ms: Race clock at the start of the step

        Returns:
            Racers that received a position, in the order assigned
        """
        ordered = sorted(
            crossings,
            key=lambda item: (item[1], self._order.get(id(item[0]), len(self._order))),
        )
        assigned = []
        for racer, offset in ordered:
            if self.record_finish(racer, step_start_ms + offset * 1000.0):
                assigned.append(racer)
        return assigned

    def record_finish(self, racer: Racer, finish_time_ms: float) -> bool:
        """Give ``racer`` the next position unless it already has one.

        Returns:
            True if a position was assigned
        """
        if racer.has_finished:
            return False
        racer.finish_position = self.next_position
        racer.finish_time_ms = finish_time_ms
        self.next_position += 1
        logger.info(
            "racer_finished",
            racer=racer.name,
            finish_position=racer.finish_position,
            finish_time_ms=round(finish_time_ms, 1),
            controlled=racer.is_controlled,
        )
        return True

    @property
    def finished_count(self) -> int:
        return self.next_position - 1

    @property
    def all_finished(self) -> bool:
        return bool(self.racers) and all(r.has_finished for r in self.racers)

    def partial_results(self) -> list[RaceResult]:
        """Finished racers by position, then still-racing racers in lane order."""
        finished = sorted(
            (r for r in self.racers if r.has_finished),
            key=lambda r: r.finish_position,
        )
        running = [r for r in self.racers if not r.has_finished]
        return [RaceResult.from_racer(r) for r in finished + running]

    def complete_results(self) -> list[RaceResult]:
        """Full ranking once every racer has finished.

        Raises:
            ResultsNotReadyError: If any racer is still running
        """
        if not self.all_finished:
            raise ResultsNotReadyError(
                f"{len(self.racers) - self.finished_count} of {len(self.racers)} racers still running"
            )
        return self.partial_results()
