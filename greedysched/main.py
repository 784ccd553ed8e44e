# greedysched/main.py

import argparse
import logging
import sys

from pydantic import ValidationError

from greedysched.api.schemas import SimulationConfig, TickSnapshot
from greedysched.config import LOG_FORMAT, LOG_LEVEL, TICK_SECONDS
from greedysched.simulation.driver import SimulationDriver

# Configure logging: timestamp + level
logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    datefmt="%H:%M:%S",
)


def render(snapshot: TickSnapshot):
    print(f"--- tick {snapshot.tick} | pending {snapshot.pending} ---")
    for worker in snapshot.workers:
        print(
            f"Worker {worker.id + 1} | Busyness {worker.accumulated_load} "
            f"| {worker.assigned_task_durations}"
        )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Greedy least-loaded task allocation simulation")
    parser.add_argument("workers", type=int, help="worker count (4-20)")
    parser.add_argument("tasks", type=int, help="task count (4-20, at least the worker count)")
    parser.add_argument("--real-time", action="store_true", help="pace assignments to wall-clock time")
    parser.add_argument("--tick", type=float, default=TICK_SECONDS, help="seconds between ticks")
    parser.add_argument("--seed", type=int, default=None, help="seed for task durations")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = SimulationConfig(
            worker_count=args.workers,
            task_count=args.tasks,
            real_time=args.real_time,
            tick_interval=args.tick,
            seed=args.seed,
        )
    except ValidationError as exc:
        for err in exc.errors():
            print(f"{err['loc'][0]}: {err['msg']}", file=sys.stderr)
        return 2

    driver = SimulationDriver(config, on_snapshot=render)
    results = driver.run()

    # Print results
    print("=== Simulation Results ===")
    print(f"Ticks: {results.ticks}")
    print(f"Makespan: {results.makespan}")
    print(f"Fairness: {results.fairness:.3f}")
    for worker_id, load in enumerate(results.loads):
        print(f"  Worker {worker_id + 1}: load {load}, tasks {results.task_counts[worker_id]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
