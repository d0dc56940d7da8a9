"""Shared pytest fixtures for sprintsim tests."""

import logging

import numpy as np
import pytest
import structlog

from sprintsim.models import CharacterProfile, CompetitorConfig, RaceConfig
from sprintsim.simulation import EventBus, RaceSimulator


def pytest_configure(config):
    """Register custom markers and configure test environment."""
    config.addinivalue_line("markers", "slow: mark test as slow running")

    _configure_test_logging()


def _configure_test_logging() -> None:
    """Configure structlog for tests; only warnings and above are printed."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def bus():
    """Event bus that records everything published."""
    return EventBus(keep_history=True)


@pytest.fixture
def steady_profiles():
    """Two competitors with known pace bands."""
    return [
        CharacterProfile(id="hare", name="Hare", color=0x00FF00, base_min_speed=40, base_max_speed=60),
        CharacterProfile(id="tortoise", name="Tortoise", color=0x0000FF, base_min_speed=20, base_max_speed=30),
    ]


@pytest.fixture
def config():
    """Default race configuration."""
    return RaceConfig()


@pytest.fixture
def simulator(config, rng, bus):
    """Race simulator on the default roster with a recording bus."""
    sim = RaceSimulator(config=config, rng=rng, bus=bus)
    bus.clear_history()
    yield sim
    sim.teardown()


@pytest.fixture
def solo_simulator(rng, bus, steady_profiles):
    """Race with no AI competitors and no checkpoints."""
    config = RaceConfig(checkpoint_ratios=(), competitors=CompetitorConfig(count=0))
    sim = RaceSimulator(config=config, profiles=steady_profiles, rng=rng, bus=bus)
    bus.clear_history()
    yield sim
    sim.teardown()


@pytest.fixture
def duel_simulator(rng, bus, steady_profiles):
    """Controlled racer against one non-drifting AI, no checkpoints."""
    config = RaceConfig(
        checkpoint_ratios=(),
        competitors=CompetitorConfig(count=1, drift_fraction=0.0),
    )
    sim = RaceSimulator(config=config, profiles=steady_profiles, rng=rng, bus=bus)
    bus.clear_history()
    yield sim
    sim.teardown()

