# greedysched/schedulers/least_loaded_scheduler.py

import logging
from typing import Deque, List, Tuple

from greedysched.api import Task
from greedysched.models import Worker


class LeastLoadedScheduler:
    """
    Greedy allocation: every tick, each worker tied for the minimum
    accumulated load takes the shortest pending task.

    With real_time pacing a tied worker whose assigned work would still be
    running at `now` is skipped for the tick. The check runs per worker,
    before that worker's assignment, so it only approximates wall-clock pacing.
    """

    def __init__(self, real_time: bool = False, time_unit: float = 1.0):
        self.real_time = real_time
        self.time_unit = time_unit

    def schedule(
        self,
        workers: List[Worker],
        pending: Deque[Task],
        started_at: float,
        now: float,
    ) -> List[Tuple[Worker, Task]]:
        logging.debug("=== Worker State Before Scheduling ===")
        for worker in workers:
            logging.debug(
                f"Worker {worker.id}: load {worker.accumulated_load}, "
                f"tasks {worker.task_durations()}"
            )

        assignments = []
        for worker in self.least_loaded_workers(workers):
            if not pending:
                break
            if self.real_time and self.is_ahead_of_clock(worker, started_at, now):
                logging.debug(
                    f"Worker {worker.id} busy until "
                    f"{worker.busy_until(started_at, self.time_unit) - started_at:.2f}s, "
                    f"skipping this tick"
                )
                continue
            task = pending.popleft()
            self._assign_task(worker, task)
            assignments.append((worker, task))

        logging.debug(f"=== {len(assignments)} assigned, {len(pending)} pending ===")
        return assignments

    def is_ahead_of_clock(self, worker: Worker, started_at: float, now: float) -> bool:
        return worker.busy_until(started_at, self.time_unit) > now

    def _assign_task(self, worker: Worker, task: Task):
        worker.assign(task)
        logging.debug(
            f"Assigned Task {task.id} (duration={task.duration}) to Worker {worker.id}, "
            f"load now {worker.accumulated_load}"
        )

    @staticmethod
    def least_loaded_workers(workers: List[Worker]) -> List[Worker]:
        """All workers sharing the minimum load, in id order. Ties are kept."""
        least_loaded: List[Worker] = []
        for worker in workers:
            if not least_loaded or worker.accumulated_load < least_loaded[0].accumulated_load:
                least_loaded = [worker]
            elif worker.accumulated_load == least_loaded[0].accumulated_load:
                least_loaded.append(worker)
        return sorted(least_loaded, key=lambda w: w.id)
