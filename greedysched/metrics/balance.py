# greedysched/metrics/balance.py

from typing import List, Sequence
from greedysched.api import SimulationResults
from greedysched.models import Worker


def jains_fairness(values: Sequence[float]) -> float:
    """
    Compute Jain's Fairness Index:
    F(x) = (sum(x_i))^2 / (n * sum(x_i^2))

    Args:
        values: per-worker accumulated loads
    Returns:
        Fairness index in [0,1]; 1.0 means perfectly even loads
    """
    if not values or all(v == 0 for v in values):
        return 0.0

    numerator = sum(values) ** 2
    denominator = len(values) * sum(v ** 2 for v in values)

    return numerator / denominator if denominator > 0 else 0.0


def makespan(workers: List[Worker]) -> int:
    """Time at which the busiest worker finishes."""
    return max((w.accumulated_load for w in workers), default=0)


def imbalance(workers: List[Worker]) -> int:
    loads = [w.accumulated_load for w in workers]
    return max(loads) - min(loads) if loads else 0


def summarize(workers: List[Worker], ticks: int) -> SimulationResults:
    loads = [w.accumulated_load for w in sorted(workers, key=lambda w: w.id)]
    task_counts = [len(w.assigned_tasks) for w in sorted(workers, key=lambda w: w.id)]
    return SimulationResults(
        ticks=ticks,
        makespan=makespan(workers),
        total_load=sum(loads),
        imbalance=imbalance(workers),
        fairness=round(jains_fairness(loads), 4),
        loads=loads,
        task_counts=task_counts,
    )
