# greedysched/schedulers/__init__.py
from .least_loaded_scheduler import LeastLoadedScheduler
