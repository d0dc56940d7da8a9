"""Data models for sprint race simulation."""

from .config import CompetitorConfig, PhysicsConfig, RaceConfig
from .racer import CharacterProfile, Racer
from .track import Checkpoint, TrackGeometry

__all__ = [
    "CharacterProfile",
    "Checkpoint",
    "CompetitorConfig",
    "PhysicsConfig",
    "RaceConfig",
    "Racer",
    "TrackGeometry",
]
