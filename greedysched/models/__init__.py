# greedysched/models/__init__.py
from .worker import Worker
