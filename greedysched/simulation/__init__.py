# greedysched/simulation/__init__.py
from .workload_generator import WorkloadGenerator, build_tasks
from .engine import AllocationEngine
from .event import Event, EventType, make_event
from .driver import DriverState, SimulationDriver
