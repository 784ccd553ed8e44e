import copy
from typing import List, Optional


class RunStore:
    """Snapshot history and results of the latest run. Lives only in memory."""

    def __init__(self):
        self._updates: List[dict] = []
        self._results: Optional[dict] = None

    async def save_update(self, update: dict):
        """Save a single update (one tick snapshot)."""
        self._updates.append(copy.deepcopy(update))

    async def load_updates(self) -> List[dict]:
        """Load all updates for the latest run."""
        return copy.deepcopy(self._updates)

    async def save_results(self, results: dict):
        """Save the final simulation results."""
        self._results = copy.deepcopy(results)

    async def load_results(self) -> Optional[dict]:
        return copy.deepcopy(self._results)

    async def clear_run(self):
        """Clear both updates and results."""
        self._updates = []
        self._results = None
