#!/usr/bin/env python3
"""Example: estimate how often the scripted player wins at a difficulty.

Usage:
    python examples/difficulty_analysis.py [--difficulty X] [--simulations N]

Examples:
    python examples/difficulty_analysis.py --difficulty 1.5 -n 500
    python examples/difficulty_analysis.py --taps 3 --no-parallel --export
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sprintsim.analysis import MonteCarloRunner
from sprintsim.host import TapScript
from sprintsim.logging_config import configure_logging
from sprintsim.models import RaceConfig
from sprintsim.output import ConsoleOutput, Exporter


def main():
    parser = argparse.ArgumentParser(description="Monte Carlo difficulty analysis")
    parser.add_argument(
        "--difficulty",
        type=float,
        default=1.0,
        help="AI speed multiplier (default: 1.0)",
    )
    parser.add_argument(
        "--simulations",
        "-n",
        type=int,
        default=200,
        help="Number of races (default: 200)",
    )
    parser.add_argument("--taps", type=float, default=6.0, help="Taps per second (default: 6.0)")
    parser.add_argument("--accuracy", type=float, default=0.8, help="Quiz accuracy (default: 0.8)")
    parser.add_argument("--seed", type=int, default=123, help="Base seed (default: 123)")
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=True,
        help="Use parallel processing (default: True)",
    )
    parser.add_argument(
        "--no-parallel",
        action="store_false",
        dest="parallel",
        help="Disable parallel processing",
    )
    parser.add_argument("--export", action="store_true", help="Export statistics to JSON")
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    args = parser.parse_args()

    configure_logging(log_level="ERROR")

    runner = MonteCarloRunner(
        config=RaceConfig(difficulty=args.difficulty),
        script=TapScript(taps_per_second=args.taps, accuracy=args.accuracy),
        seed=args.seed,
    )

    print(f"Running {args.simulations} races at difficulty x{args.difficulty:.2f}...")
    results = runner.run(num_simulations=args.simulations, parallel=args.parallel)
    ConsoleOutput.print_monte_carlo_summary(results)

    if args.export:
        exporter = Exporter(output_dir=args.output_dir)
        path = exporter.export_statistics_json(results, f"difficulty_{args.difficulty:.2f}.json")
        print(f"\n  statistics_json: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
