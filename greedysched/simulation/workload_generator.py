import random
import logging
from typing import Iterable, List, Optional, Tuple
from pydantic import ValidationError

from greedysched.api import Task
from greedysched.config import MAX_TASK_DURATION, MIN_TASK_DURATION
from greedysched.models import Worker
from greedysched.utils.task_utils import sort_pending_queue, total_duration


def build_tasks(durations: Iterable[int]) -> List[Task]:
    """Pending queue from explicit durations, used to replay a known workload."""
    try:
        return sort_pending_queue(durations)
    except ValidationError as exc:
        raise ValueError(
            f"Task durations must lie in [{MIN_TASK_DURATION}, {MAX_TASK_DURATION}]"
        ) from exc


class WorkloadGenerator:
    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def generate_workers(self, worker_count: int) -> List[Worker]:
        return [Worker(id=i) for i in range(worker_count)]

    def generate_tasks(self, task_count: int) -> List[Task]:
        durations = [
            self.rng.randint(MIN_TASK_DURATION, MAX_TASK_DURATION)
            for _ in range(task_count)
        ]
        logging.debug(f"Generated task durations {durations}")
        return sort_pending_queue(durations)

    def generate(self, worker_count: int, task_count: int) -> Tuple[List[Worker], List[Task]]:
        workers = self.generate_workers(worker_count)
        tasks = self.generate_tasks(task_count)
        logging.info(
            f"Generated workload: {len(workers)} workers, {len(tasks)} tasks, "
            f"total duration {total_duration(tasks)}"
        )
        return workers, tasks
