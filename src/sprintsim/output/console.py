"""Console output formatting."""

from sprintsim.analysis.montecarlo import SimulationResults
from sprintsim.simulation.results import RaceResult

MEDALS = {1: "[gold]", 2: "[silver]", 3: "[bronze]"}


def format_time(elapsed_ms: float | None) -> str:
    """Format milliseconds as MM:SS.cc, or '--:--.--' for no time."""
    if elapsed_ms is None:
        return "--:--.--"
    total_seconds = int(elapsed_ms // 1000)
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    centiseconds = int((elapsed_ms % 1000) // 10)
    return f"{minutes:02d}:{seconds:02d}.{centiseconds:02d}"


def ordinal(position: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th'."""
    if 10 <= position % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")
    return f"{position}{suffix}"


class ConsoleOutput:
    """Formats race results for console display."""

    @staticmethod
    def print_race_results(results: list[RaceResult]) -> None:
        """Print a result set in the order given.

        Args:
            results: Complete or partial results
        """
        print("\n" + "=" * 50)
        print("RACE RESULTS")
        print("=" * 50)
        print(f"{'Pos':<6} {'Racer':<16} {'Time':<10} {'':<8}")
        print("-" * 50)

        for result in results:
            if result.finish_position is None:
                pos = "--"
                medal = "racing"
            else:
                pos = ordinal(result.finish_position)
                medal = MEDALS.get(result.finish_position, "")
            name = f"{result.name}{' *' if result.is_controlled else ''}"
            print(
                f"{pos:<6} "
                f"{name:<16} "
                f"{format_time(result.finish_time_ms):<10} "
                f"{medal:<8}"
            )

        print("=" * 50)

    @staticmethod
    def print_monte_carlo_summary(results: SimulationResults) -> None:
        """Print difficulty analysis summary.

        Args:
            results: Aggregated simulation results
        """
        print("\n" + "=" * 60)
        print(f"DIFFICULTY ANALYSIS - x{results.difficulty:.2f}")
        print(f"({results.num_simulations} races)")
        print("=" * 60)

        print(f"\n{results.controlled_name}:")
        print(f"  Win rate:        {results.controlled_win_rate:5.1f}%")
        print(f"  Podium rate:     {results.controlled_podium_rate:5.1f}%")
        print(f"  Avg position:    {results.controlled_avg_position:5.2f}")
        print(f"  Avg finish time: {format_time(results.controlled_avg_time_ms)}")

        print("\nWIN RATES:")
        print("-" * 40)
        for name, rate in results.get_win_rates().items():
            bar = "#" * int(rate / 2)
            print(f"{name:<16} {rate:5.1f}% {bar}")

        print("=" * 60)
