"""Tests for finish-position assignment and result views."""

import pytest

from sprintsim.exceptions import ResultsNotReadyError
from sprintsim.models import Racer
from sprintsim.simulation import RaceResult, ResultsAggregator


@pytest.fixture
def field():
    return [
        Racer(name="Lane Two", lane=2),
        Racer(name="Rosie", lane=0, is_controlled=True),
        Racer(name="Lane One", lane=1),
    ]


@pytest.fixture
def aggregator(field):
    return ResultsAggregator(field)


def by_name(racers, name):
    return next(r for r in racers if r.name == name)


class TestRecordFinishes:
    """Tests for position assignment."""

    def test_stable_order(self, aggregator):
        assert [r.name for r in aggregator.racers] == ["Rosie", "Lane One", "Lane Two"]

    def test_order_by_crossing_offset(self, aggregator, field):
        rosie = by_name(field, "Rosie")
        lane_two = by_name(field, "Lane Two")

        # Rosie is reported first but crossed later in the step
        assigned = aggregator.record_finishes([(rosie, 0.01), (lane_two, 0.002)], 1000.0)

        assert assigned == [lane_two, rosie]
        assert lane_two.finish_position == 1
        assert rosie.finish_position == 2
        assert lane_two.finish_time_ms == pytest.approx(1002.0)
        assert rosie.finish_time_ms == pytest.approx(1010.0)

    def test_tie_goes_to_controlled_racer(self, aggregator, field):
        rosie = by_name(field, "Rosie")
        lane_one = by_name(field, "Lane One")
        aggregator.record_finishes([(lane_one, 0.005), (rosie, 0.005)], 0.0)
        assert rosie.finish_position == 1
        assert lane_one.finish_position == 2

    def test_tie_between_competitors_goes_to_lower_lane(self, aggregator, field):
        lane_one = by_name(field, "Lane One")
        lane_two = by_name(field, "Lane Two")
        aggregator.record_finishes([(lane_two, 0.0), (lane_one, 0.0)], 0.0)
        assert lane_one.finish_position == 1
        assert lane_two.finish_position == 2

    def test_duplicate_finish_is_noop(self, aggregator, field):
        rosie = by_name(field, "Rosie")
        assert aggregator.record_finish(rosie, 500.0)
        assert not aggregator.record_finish(rosie, 900.0)
        assert rosie.finish_position == 1
        assert rosie.finish_time_ms == 500.0
        assert aggregator.next_position == 2

    def test_positions_form_sequence(self, aggregator, field):
        for step, racer in enumerate(reversed(field)):
            aggregator.record_finishes([(racer, 0.0)], step * 16.0)
        assert sorted(r.finish_position for r in field) == [1, 2, 3]
        assert aggregator.all_finished

    def test_reset_restarts_counter(self, aggregator, field):
        aggregator.record_finish(field[0], 0.0)
        for racer in field:
            racer.reset_race_state()
        aggregator.reset(field)
        assert aggregator.next_position == 1
        assert aggregator.finished_count == 0


class TestResultViews:
    """Tests for partial and complete results."""

    def test_partial_before_anyone_finishes(self, aggregator):
        results = aggregator.partial_results()
        assert [r.name for r in results] == ["Rosie", "Lane One", "Lane Two"]
        assert all(r.finish_position is None for r in results)

    def test_partial_lists_finished_first(self, aggregator, field):
        aggregator.record_finish(by_name(field, "Lane Two"), 10_000.0)
        results = aggregator.partial_results()

        assert [r.name for r in results] == ["Lane Two", "Rosie", "Lane One"]
        assert results[0].finish_position == 1

    def test_reads_are_idempotent(self, aggregator, field):
        aggregator.record_finish(by_name(field, "Lane One"), 1.0)
        assert aggregator.partial_results() == aggregator.partial_results()
        assert aggregator.next_position == 2

    def test_complete_requires_everyone(self, aggregator, field):
        aggregator.record_finish(by_name(field, "Rosie"), 1.0)
        with pytest.raises(ResultsNotReadyError):
            aggregator.complete_results()

    def test_complete_ranking(self, aggregator, field):
        aggregator.record_finishes(
            [(by_name(field, "Lane One"), 0.1), (by_name(field, "Rosie"), 0.2), (by_name(field, "Lane Two"), 0.3)],
            0.0,
        )
        results = aggregator.complete_results()
        assert [r.finish_position for r in results] == [1, 2, 3]
        assert [r.name for r in results] == ["Lane One", "Rosie", "Lane Two"]
        assert results[1].is_controlled

    def test_empty_field_never_finished(self):
        assert not ResultsAggregator([]).all_finished


class TestRaceResult:
    """Tests for the result record."""

    def test_from_racer_and_to_dict(self):
        racer = Racer(name="Rosie", color=0xFF69B4, lane=0, is_controlled=True)
        racer.finish_position = 2
        racer.finish_time_ms = 12_500.0

        result = RaceResult.from_racer(racer)

        assert result.to_dict() == {
            "name": "Rosie",
            "color": 0xFF69B4,
            "finish_time_ms": 12_500.0,
            "finish_position": 2,
            "is_controlled": True,
        }
