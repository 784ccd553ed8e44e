# greedysched/api/__init__.py
from .schemas import SimulationConfig, Task, WorkerSnapshot, TickSnapshot, SimulationResults
