# greedysched/utils/__init__.py
