# greedysched/metrics/__init__.py
from .balance import jains_fairness, makespan, imbalance, summarize
