# greedysched/store/__init__.py
from .run_store import RunStore
