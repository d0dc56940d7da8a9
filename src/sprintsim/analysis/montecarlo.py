"""Monte Carlo difficulty analysis over headless races."""

from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field

import numpy as np

from sprintsim.host.audio import NullAudio
from sprintsim.host.headless import HeadlessHost, TapScript
from sprintsim.models import CharacterProfile, RaceConfig
from sprintsim.simulation.race import RaceSimulator
from sprintsim.simulation.results import RaceResult


@dataclass
class RacerStatistics:
    """Aggregated statistics for one racer name across simulations."""

    name: str
    is_controlled: bool = False
    wins: int = 0
    podiums: int = 0
    entries: int = 0
    unfinished: int = 0
    positions: list[int] = field(default_factory=list)
    finish_times_ms: list[float] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        """Win percentage."""
        return self.wins / self.entries * 100 if self.entries else 0.0

    @property
    def podium_rate(self) -> float:
        """Podium percentage."""
        return self.podiums / self.entries * 100 if self.entries else 0.0

    @property
    def avg_position(self) -> float:
        return float(np.mean(self.positions)) if self.positions else 0.0

    @property
    def avg_time_ms(self) -> float | None:
        return float(np.mean(self.finish_times_ms)) if self.finish_times_ms else None


@dataclass
class SimulationResults:
    """Results from a batch of headless races."""

    num_simulations: int
    difficulty: float
    controlled_name: str
    racer_stats: dict[str, RacerStatistics]
    race_results: list[list[RaceResult]]

    @property
    def controlled(self) -> RacerStatistics:
        return self.racer_stats[self.controlled_name]

    @property
    def controlled_win_rate(self) -> float:
        return self.controlled.win_rate

    @property
    def controlled_podium_rate(self) -> float:
        return self.controlled.podium_rate

    @property
    def controlled_avg_position(self) -> float:
        return self.controlled.avg_position

    @property
    def controlled_avg_time_ms(self) -> float | None:
        return self.controlled.avg_time_ms

    def get_win_rates(self) -> dict[str, float]:
        """Win rate per racer, best first."""
        return {
            name: stats.win_rate
            for name, stats in sorted(
                self.racer_stats.items(),
                key=lambda x: x[1].wins,
                reverse=True,
            )
        }

    def get_position_distribution(self) -> dict[int, float]:
        """Finishing-position distribution of the controlled racer (percent)."""
        positions = self.controlled.positions
        counts: dict[int, int] = defaultdict(int)
        for pos in positions:
            counts[pos] += 1

        return {
            pos: count / len(positions) * 100
            for pos, count in sorted(counts.items())
        }


def _run_single_simulation(args: tuple) -> list[RaceResult]:
    """Run one headless race (for multiprocessing).

    Args:
        args: Tuple of (config_data, profiles_data, script_data, seed, max_seconds)

    Returns:
        The race results
    """
    config_data, profiles_data, script_data, seed, max_seconds = args

    # Reconstruct objects from serializable data
    config = RaceConfig.model_validate(config_data)
    profiles = [CharacterProfile.model_validate(p) for p in profiles_data] if profiles_data else None
    script = TapScript.model_validate(script_data)

    rng = np.random.default_rng(seed)
    simulator = RaceSimulator(config=config, profiles=profiles, rng=rng)
    host = HeadlessHost(simulator, script=script, audio=NullAudio(), rng=rng)
    try:
        return host.run(max_seconds=max_seconds)
    finally:
        host.close()
        simulator.teardown()


class MonteCarloRunner:
    """Runs many seeded races to measure how hard a configuration is."""

    def __init__(
        self,
        config: RaceConfig | None = None,
        script: TapScript | None = None,
        profiles: list[CharacterProfile] | None = None,
        seed: int | None = None,
        max_seconds: float = 600.0,
    ):
        """Initialize Monte Carlo runner.

        Args:
            config: Race configuration under test
            script: Simulated player behavior
            profiles: Competitor pool (default roster if None)
            seed: Random seed for reproducibility
            max_seconds: Simulated-time cap per race
        """
        self.config = config if config is not None else RaceConfig()
        self.script = script if script is not None else TapScript()
        self.profiles = profiles
        self.base_seed = seed if seed is not None else int(np.random.default_rng().integers(0, 2**31))
        self.max_seconds = max_seconds

    def run(
        self,
        num_simulations: int = 500,
        parallel: bool = True,
        max_workers: int | None = None,
    ) -> SimulationResults:
        """Run Monte Carlo simulations.

        Args:
            num_simulations: Number of races
            parallel: Whether to use parallel processing
            max_workers: Maximum parallel workers (None = CPU count)

        Returns:
            SimulationResults with aggregated statistics
        """
        config_data = self.config.model_dump()
        profiles_data = [p.model_dump() for p in self.profiles] if self.profiles else None
        script_data = self.script.model_dump()

        args_list = [
            (config_data, profiles_data, script_data, self.base_seed + i, self.max_seconds)
            for i in range(num_simulations)
        ]

        if parallel and num_simulations > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                all_results = list(executor.map(_run_single_simulation, args_list))
        else:
            all_results = [_run_single_simulation(args) for args in args_list]

        return SimulationResults(
            num_simulations=num_simulations,
            difficulty=self.config.difficulty,
            controlled_name=self.config.controlled_name,
            racer_stats=self._aggregate_statistics(all_results),
            race_results=all_results,
        )

    def _aggregate_statistics(
        self,
        race_results: list[list[RaceResult]],
    ) -> dict[str, RacerStatistics]:
        """Aggregate per-racer statistics from all races."""
        stats: dict[str, RacerStatistics] = {
            self.config.controlled_name: RacerStatistics(
                name=self.config.controlled_name,
                is_controlled=True,
            ),
        }

        for sim_results in race_results:
            for result in sim_results:
                racer_stat = stats.setdefault(
                    result.name,
                    RacerStatistics(name=result.name, is_controlled=result.is_controlled),
                )
                racer_stat.entries += 1

                if result.finish_position is None:
                    racer_stat.unfinished += 1
                    continue

                racer_stat.positions.append(result.finish_position)
                if result.finish_time_ms is not None:
                    racer_stat.finish_times_ms.append(result.finish_time_ms)
                if result.finish_position == 1:
                    racer_stat.wins += 1
                if result.finish_position <= 3:
                    racer_stat.podiums += 1

        return stats

    def run_quick(self, num_simulations: int = 50) -> SimulationResults:
        """Run without a process pool.

        Useful for testing or when running in environments
        where multiprocessing is problematic.
        """
        return self.run(num_simulations=num_simulations, parallel=False)
