"""Tests for AI competitor selection and movement."""

import numpy as np
import pytest

from sprintsim.data.characters import CHARACTER_PROFILES
from sprintsim.models import CompetitorConfig, Racer, TrackGeometry
from sprintsim.simulation import CompetitorAI


class TestConstruction:
    """Tests for pool validation."""

    def test_empty_pool_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            CompetitorAI([])

    def test_duplicate_ids_rejected(self):
        profile = CHARACTER_PROFILES[0]
        with pytest.raises(ValueError, match="duplicate"):
            CompetitorAI([profile, profile])

    def test_roster_size_limited_by_pool(self, steady_profiles):
        ai = CompetitorAI(steady_profiles, CompetitorConfig(count=5))
        assert ai.roster_size == 2


class TestSelect:
    """Tests for roster selection."""

    def test_distinct_profiles_one_per_lane(self, rng):
        ai = CompetitorAI(CHARACTER_PROFILES, CompetitorConfig(count=5), rng=rng)
        racers = ai.select(first_lane=1)

        assert len(racers) == 5
        assert len({r.profile_id for r in racers}) == 5
        assert [r.lane for r in racers] == [1, 2, 3, 4, 5]

    def test_speeds_within_bounds(self, rng):
        ai = CompetitorAI(CHARACTER_PROFILES, rng=rng)
        for difficulty in (0.5, 1.0, 2.0):
            for racer in ai.select(difficulty):
                assert racer.min_speed <= racer.speed <= racer.max_speed

    def test_difficulty_scales_bands(self, rng):
        ai = CompetitorAI(CHARACTER_PROFILES, rng=rng)
        for racer in ai.select(difficulty=2.0):
            profile = next(p for p in CHARACTER_PROFILES if p.id == racer.profile_id)
            assert racer.max_speed == pytest.approx(profile.max_speed * 2.0)

    def test_seeded_selection_is_reproducible(self):
        first = CompetitorAI(CHARACTER_PROFILES, rng=np.random.default_rng(3)).select()
        second = CompetitorAI(CHARACTER_PROFILES, rng=np.random.default_rng(3)).select()
        assert [(r.profile_id, r.speed) for r in first] == [(r.profile_id, r.speed) for r in second]

    def test_zero_count(self, steady_profiles, rng):
        ai = CompetitorAI(steady_profiles, CompetitorConfig(count=0), rng=rng)
        assert ai.select() == []


class TestAdvance:
    """Tests for movement, finish crossings and drift."""

    def test_moves_by_speed(self, steady_profiles, rng):
        ai = CompetitorAI(steady_profiles, rng=rng)
        racer = Racer(name="a", lane=1, speed=20.0, min_speed=10.0, max_speed=30.0)
        crossings = ai.advance([racer], 0.5, TrackGeometry())
        assert racer.position == pytest.approx(10.0)
        assert crossings == []

    def test_crossing_offset(self, steady_profiles, rng):
        ai = CompetitorAI(steady_profiles, CompetitorConfig(drift_fraction=0.0), rng=rng)
        racer = Racer(name="a", lane=1, position=95.0, speed=10.0, min_speed=10.0, max_speed=10.0)

        crossings = ai.advance([racer], 1.0, TrackGeometry(length=100.0))

        assert racer.position == 100.0
        assert len(crossings) == 1
        assert crossings[0][0] is racer
        assert crossings[0][1] == pytest.approx(0.5)

    def test_finished_racers_do_not_move(self, steady_profiles, rng):
        ai = CompetitorAI(steady_profiles, rng=rng)
        racer = Racer(name="a", lane=1, position=100.0, speed=10.0, finish_position=1)
        assert ai.advance([racer], 1.0, TrackGeometry(length=100.0)) == []
        assert racer.position == 100.0

    def test_drift_stays_in_band(self, rng):
        ai = CompetitorAI(
            CHARACTER_PROFILES,
            CompetitorConfig(drift_interval=0.5, drift_fraction=1.0),
            rng=rng,
        )
        racers = ai.select()
        initial = [r.speed for r in racers]
        track = TrackGeometry(length=1e9)

        for _ in range(200):
            ai.advance(racers, 0.5, track)
            for racer in racers:
                assert racer.min_speed <= racer.speed <= racer.max_speed

        assert [r.speed for r in racers] != initial

    def test_no_drift_before_interval(self, rng):
        ai = CompetitorAI(CHARACTER_PROFILES, CompetitorConfig(drift_interval=2.0), rng=rng)
        racers = ai.select()
        initial = [r.speed for r in racers]
        ai.advance(racers, 1.9, TrackGeometry(length=1e9))
        assert [r.speed for r in racers] == initial
