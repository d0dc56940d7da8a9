"""Export race results to CSV and JSON."""

import csv
import json
from pathlib import Path
from typing import Any

from sprintsim.analysis.montecarlo import SimulationResults
from sprintsim.simulation.results import RaceResult


class Exporter:
    """Exports race results to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_results_csv(
        self,
        results: list[RaceResult],
        filename: str = "race_results.csv",
    ) -> Path:
        """Export one race's results to CSV.

        Args:
            results: Race results in ranking order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "finish_position", "name", "color", "finish_time_ms", "is_controlled",
            ])
            for result in results:
                writer.writerow([
                    result.finish_position if result.finish_position is not None else "",
                    result.name,
                    f"#{result.color:06x}",
                    f"{result.finish_time_ms:.1f}" if result.finish_time_ms is not None else "",
                    int(result.is_controlled),
                ])

        return filepath

    def export_results_json(
        self,
        results: list[RaceResult],
        filename: str = "race_results.json",
    ) -> Path:
        """Export one race's results to JSON.

        Args:
            results: Race results in ranking order
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename
        payload = {
            "all_finished": all(r.finish_position is not None for r in results),
            "results": [r.to_dict() for r in results],
        }
        with open(filepath, "w") as f:
            json.dump(payload, f, indent=2)

        return filepath

    def export_statistics_json(
        self,
        results: SimulationResults,
        filename: str = "statistics.json",
    ) -> Path:
        """Export difficulty analysis statistics to JSON.

        Args:
            results: Simulation results
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        stats_dict: dict[str, Any] = {
            "metadata": {
                "num_simulations": results.num_simulations,
                "difficulty": results.difficulty,
            },
            "controlled": {
                "name": results.controlled_name,
                "win_rate": results.controlled_win_rate,
                "podium_rate": results.controlled_podium_rate,
                "avg_position": results.controlled_avg_position,
                "avg_finish_time_ms": results.controlled_avg_time_ms,
            },
            "win_rates": results.get_win_rates(),
            "position_distribution": results.get_position_distribution(),
        }

        with open(filepath, "w") as f:
            json.dump(stats_dict, f, indent=2)

        return filepath
