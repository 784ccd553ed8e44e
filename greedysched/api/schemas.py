# greedysched/api/schemas.py

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, conint, confloat, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, List

from greedysched.config import (
    MAX_COUNT,
    MAX_TASK_DURATION,
    MIN_COUNT,
    MIN_TASK_DURATION,
    TICK_SECONDS,
)


def _check_count_range(value: int, label: str, field: str) -> int:
    if value < MIN_COUNT:
        raise PydanticCustomError(
            f"{field}_too_small",
            f"{label} must be greater or equal to {MIN_COUNT}",
        )
    if value > MAX_COUNT:
        raise PydanticCustomError(
            f"{field}_too_large",
            f"{label} must be less than or equal to {MAX_COUNT}",
        )
    return value


# -----------------------------
# 1. Simulation Config (User Input Parameters)
# -----------------------------
class SimulationConfig(BaseModel):
    worker_count: int = Field(..., description="Number of homogeneous workers")
    task_count: int = Field(..., description="Number of tasks to generate, at least worker_count")
    real_time: bool = Field(False, description="Pace assignments to wall-clock time")

    tick_interval: confloat(ge=0) = Field(
        default_factory=lambda: TICK_SECONDS,
        description="Wall-clock seconds between ticks (0 runs as fast as possible)",
    )
    seed: Optional[int] = Field(None, description="Seed for reproducible task durations")

    @field_validator("worker_count")
    @classmethod
    def worker_count_in_range(cls, value: int) -> int:
        return _check_count_range(value, "Worker count", "worker_count")

    @field_validator("task_count")
    @classmethod
    def task_count_in_range(cls, value: int, info: ValidationInfo) -> int:
        _check_count_range(value, "Task count", "task_count")
        worker_count = info.data.get("worker_count")
        if worker_count is not None and value < worker_count:
            raise PydanticCustomError(
                "task_count_below_worker_count",
                "Task count must be greater than worker count",
            )
        return value


# -----------------------------
# 2. Task Model
# -----------------------------
class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: conint(ge=0)
    duration: conint(ge=MIN_TASK_DURATION, le=MAX_TASK_DURATION)


# -----------------------------
# 3. Snapshots handed to renderers
# -----------------------------
class WorkerSnapshot(BaseModel):
    id: int
    accumulated_load: int
    assigned_task_durations: List[int] = Field(default_factory=list)


class TickSnapshot(BaseModel):
    tick: int = Field(..., description="Number of ticks executed so far, 0 before the first")
    pending: int = Field(..., description="Tasks still waiting in the pending queue")
    completed: bool = False
    workers: List[WorkerSnapshot] = Field(default_factory=list)


# -----------------------------
# 4. Run Results
# -----------------------------
class SimulationResults(BaseModel):
    ticks: int
    makespan: int
    total_load: int
    imbalance: int
    fairness: float
    loads: List[int] = Field(default_factory=list, description="Accumulated load indexed by worker id")
    task_counts: List[int] = Field(default_factory=list, description="Assigned task count indexed by worker id")
