#!/usr/bin/env python3
"""Example: run one sprint race with a scripted player.

Usage:
    python examples/headless_race.py [--seed N] [--taps RATE] [--accuracy P]

Examples:
    python examples/headless_race.py --seed 7
    python examples/headless_race.py --taps 4 --accuracy 0.5 --difficulty 1.3 --export
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from sprintsim.host import HeadlessHost, RecordingAudio, TapScript
from sprintsim.logging_config import configure_logging
from sprintsim.models import RaceConfig
from sprintsim.output import ConsoleOutput, Exporter, format_time
from sprintsim.simulation import EventType, RaceSimulator


def main():
    parser = argparse.ArgumentParser(description="Run a headless sprint race")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--taps",
        type=float,
        default=6.0,
        help="Taps per second (default: 6.0)",
    )
    parser.add_argument(
        "--accuracy",
        type=float,
        default=0.8,
        help="Chance of answering a checkpoint quiz correctly (default: 0.8)",
    )
    parser.add_argument(
        "--difficulty",
        type=float,
        default=1.0,
        help="AI speed multiplier (default: 1.0)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export results to CSV/JSON",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    args = parser.parse_args()

    configure_logging(log_level=args.log_level)

    rng = np.random.default_rng(args.seed)
    simulator = RaceSimulator(config=RaceConfig(difficulty=args.difficulty), rng=rng)
    simulator.bus.subscribe(
        EventType.COUNTDOWN_TICK,
        lambda e: print("GO!" if e["count"] == 0 else f"{e['count']}..."),
    )
    simulator.bus.subscribe(
        EventType.QUIZ_REQUESTED,
        lambda e: print(f"Checkpoint {e['checkpoint_index'] + 1} at {format_time(e.elapsed_ms)}"),
    )

    audio = RecordingAudio()
    script = TapScript(taps_per_second=args.taps, accuracy=args.accuracy)
    host = HeadlessHost(simulator, script=script, audio=audio, rng=rng)

    print("Sprint Race")
    print("=" * 40)
    print("Racers: " + ", ".join(r.name for r in simulator.racers))

    results = host.run()
    ConsoleOutput.print_race_results(results)

    for checkpoint_index, correct, time_taken in host.quizzes:
        verdict = "correct" if correct else "wrong"
        print(f"  quiz {checkpoint_index + 1}: {verdict} in {time_taken / 1000:.1f}s")

    if args.export:
        exporter = Exporter(output_dir=args.output_dir)
        print(f"  csv: {exporter.export_results_csv(results)}")
        print(f"  json: {exporter.export_results_json(results)}")

    host.close()
    simulator.teardown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
