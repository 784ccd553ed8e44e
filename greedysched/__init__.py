# greedysched/__init__.py
from .api import SimulationConfig, Task, TickSnapshot, WorkerSnapshot, SimulationResults
from .models import Worker
from .schedulers import LeastLoadedScheduler
from .simulation import AllocationEngine, SimulationDriver, DriverState, WorkloadGenerator, build_tasks
