# greedysched/simulation/engine.py

import time
import logging
from collections import deque
from typing import Callable, List, Optional, Sequence

from greedysched.api import SimulationConfig, SimulationResults, Task, TickSnapshot
from greedysched.metrics.balance import summarize
from greedysched.models import Worker
from greedysched.schedulers import LeastLoadedScheduler
from greedysched.simulation.workload_generator import WorkloadGenerator
from greedysched.utils.task_utils import is_duration_sorted


class AllocationEngine:
    def __init__(
        self,
        workers: Sequence[Worker],
        tasks: Sequence[Task],
        scheduler: Optional[LeastLoadedScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not workers:
            raise ValueError("AllocationEngine needs at least one worker")
        if not is_duration_sorted(tasks):
            raise ValueError("Pending tasks must be sorted by ascending duration")

        self.workers: List[Worker] = sorted(workers, key=lambda w: w.id)
        self.pending = deque(tasks)
        self.task_count = len(tasks)
        self.scheduler = scheduler or LeastLoadedScheduler()
        self.clock = clock
        self.started_at = clock()
        self.tick = 0

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        generator: Optional[WorkloadGenerator] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "AllocationEngine":
        generator = generator or WorkloadGenerator(seed=config.seed)
        workers, tasks = generator.generate(config.worker_count, config.task_count)
        scheduler = LeastLoadedScheduler(
            real_time=config.real_time, time_unit=config.tick_interval
        )
        return cls(workers, tasks, scheduler=scheduler, clock=clock)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def is_complete(self) -> bool:
        return not self.pending

    # ------------------------------
    # One Tick
    # ------------------------------
    def step(self) -> TickSnapshot:
        if self.is_complete:
            logging.debug("Step requested with no pending tasks; simulation complete")
            return self.snapshot()

        self.tick += 1
        now = self.clock()
        assignments = self.scheduler.schedule(
            self.workers, self.pending, self.started_at, now
        )
        logging.debug(
            f"Tick {self.tick} at {now - self.started_at:.2f}s: "
            f"{len(assignments)} assigned, {self.pending_count} pending"
        )
        return self.snapshot()

    def snapshot(self) -> TickSnapshot:
        return TickSnapshot(
            tick=self.tick,
            pending=self.pending_count,
            completed=self.is_complete,
            workers=[w.snapshot() for w in self.workers],
        )

    # ------------------------------
    # Results Collection
    # ------------------------------
    def collect_results(self) -> SimulationResults:
        return summarize(self.workers, self.tick)
