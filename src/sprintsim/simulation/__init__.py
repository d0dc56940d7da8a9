"""Simulation engine components."""

from .checkpoints import AnswerOutcome, CheckpointGate
from .competitors import CompetitorAI
from .events import EventBus, EventType, RaceEvent
from .physics import PlayerPhysics
from .race import RaceSimulator
from .results import RaceResult, ResultsAggregator
from .state import Countdown, RaceState, RaceStateMachine

__all__ = [
    "AnswerOutcome",
    "CheckpointGate",
    "CompetitorAI",
    "Countdown",
    "EventBus",
    "EventType",
    "PlayerPhysics",
    "RaceEvent",
    "RaceResult",
    "RaceSimulator",
    "RaceState",
    "RaceStateMachine",
    "ResultsAggregator",
]
