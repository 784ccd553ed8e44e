# greedysched/utils/task_utils.py

from typing import Iterable, List, Sequence
from greedysched.api import Task


def sort_pending_queue(durations: Iterable[int]) -> List[Task]:
    """
    Build the pending queue from raw durations:
    1. Ascending duration (shortest first)
    2. Generation order on ties (sorted() is stable)

    Task ids are assigned after sorting, so id order == queue order.
    """
    ordered = sorted(durations)
    return [Task(id=i, duration=d) for i, d in enumerate(ordered)]


def is_duration_sorted(tasks: Sequence[Task]) -> bool:
    return all(a.duration <= b.duration for a, b in zip(tasks, tasks[1:]))


def total_duration(tasks: Iterable[Task]) -> int:
    return sum(task.duration for task in tasks)
