# greedysched/models/worker.py

from pydantic import BaseModel, Field, conint
from typing import List
from greedysched.api import Task, WorkerSnapshot


class Worker(BaseModel):
    id: conint(ge=0)
    accumulated_load: conint(ge=0) = 0
    assigned_tasks: List[Task] = Field(default_factory=list)

    def assign(self, task: Task):
        self.assigned_tasks.append(task)
        self.accumulated_load += task.duration

    def busy_until(self, started_at: float, time_unit: float) -> float:
        """Wall-clock time at which this worker finishes everything assigned so far."""
        return started_at + self.accumulated_load * time_unit

    def task_durations(self) -> List[int]:
        return [task.duration for task in self.assigned_tasks]

    def snapshot(self) -> WorkerSnapshot:
        return WorkerSnapshot(
            id=self.id,
            accumulated_load=self.accumulated_load,
            assigned_task_durations=self.task_durations(),
        )
