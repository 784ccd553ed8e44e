import pytest

from greedysched.simulation.workload_generator import WorkloadGenerator, build_tasks


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FixedWorkload(WorkloadGenerator):
    """Generator that replays known durations instead of drawing random ones."""

    def __init__(self, durations):
        super().__init__(seed=0)
        self.durations = list(durations)

    def generate_tasks(self, task_count):
        assert task_count == len(self.durations)
        return build_tasks(self.durations)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fixed_workload():
    return FixedWorkload
