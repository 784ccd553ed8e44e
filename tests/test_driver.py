import asyncio

import pytest

from greedysched.api import SimulationConfig
from greedysched.simulation.driver import DriverState, SimulationDriver


def config(worker_count=4, task_count=5, **kwargs):
    kwargs.setdefault("tick_interval", 0)
    return SimulationConfig(worker_count=worker_count, task_count=task_count, **kwargs)


class TestRunBlocking:
    def test_run_emits_idle_snapshot_then_every_tick(self, fixed_workload):
        seen = []
        driver = SimulationDriver(
            config(),
            generator=fixed_workload([4, 6, 8, 10, 15]),
            on_snapshot=seen.append,
        )

        results = driver.run()

        assert [s.tick for s in seen] == [0, 1, 2]
        assert [s.completed for s in seen] == [False, False, True]
        assert seen[-1].workers[0].assigned_task_durations == [4, 15]
        assert results.ticks == 2
        assert results.makespan == 19
        assert driver.state == DriverState.COMPLETED

    def test_single_tick_run(self, fixed_workload):
        driver = SimulationDriver(config(task_count=4), generator=fixed_workload([5, 7, 9, 12]))

        results = driver.run()

        assert results.ticks == 1
        assert results.loads == [5, 7, 9, 12]

    def test_each_run_gets_fresh_state(self, fixed_workload):
        driver = SimulationDriver(config(), generator=fixed_workload([4, 6, 8, 10, 15]))
        driver.run()
        first_engine = driver.engine

        results = driver.run()

        assert driver.engine is not first_engine
        assert results.loads == [19, 6, 8, 10]

    def test_random_workload_terminates(self):
        driver = SimulationDriver(config(worker_count=7, task_count=20, seed=9))

        results = driver.run()

        assert sum(results.task_counts) == 20
        assert driver.engine.is_complete


class TestRunLive:
    @pytest.mark.asyncio
    async def test_run_live_yields_until_completion(self, fixed_workload):
        driver = SimulationDriver(config(), generator=fixed_workload([4, 6, 8, 10, 15]))

        snapshots = [s async for s in driver.run_live()]

        assert [s.tick for s in snapshots] == [0, 1, 2]
        assert snapshots[-1].completed
        assert driver.state == DriverState.COMPLETED

    @pytest.mark.asyncio
    async def test_paced_run_skips_ticks_until_worker_is_free(self, clock, fixed_workload):
        # one simulated unit per tick; the fake clock moves one tick per snapshot
        interval = 0.0625
        driver = SimulationDriver(
            config(real_time=True, tick_interval=interval),
            generator=fixed_workload([4, 6, 8, 10, 15]),
            clock=clock,
        )

        pending = []
        async for snapshot in driver.run_live():
            pending.append(snapshot.pending)
            clock.advance(interval)

        # worker 0 holds 4 units, so the last task waits until tick 4
        assert pending == [5, 1, 1, 1, 0]
        assert driver.engine.collect_results().loads == [19, 6, 8, 10]


class TestBackgroundRun:
    @pytest.mark.asyncio
    async def test_start_runs_to_completion(self, fixed_workload):
        seen = []
        driver = SimulationDriver(
            config(), generator=fixed_workload([4, 6, 8, 10, 15]), on_snapshot=seen.append
        )

        driver.start()
        assert driver.state == DriverState.RUNNING
        results = await driver.wait()

        assert driver.state == DriverState.COMPLETED
        assert results.ticks == 2
        assert [s.tick for s in seen] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_async_snapshot_callback_is_awaited(self, fixed_workload):
        seen = []

        async def render(snapshot):
            await asyncio.sleep(0)
            seen.append(snapshot.tick)

        driver = SimulationDriver(config(), generator=fixed_workload([4, 6, 8, 10, 15]), on_snapshot=render)
        driver.start()
        await driver.wait()

        assert seen == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_stop_tears_down_the_timer(self, fixed_workload):
        seen = []
        driver = SimulationDriver(
            config(tick_interval=30), generator=fixed_workload([4, 6, 8, 10, 15]), on_snapshot=seen.append
        )

        timer = driver.start()
        await asyncio.sleep(0.01)
        await driver.stop()

        assert timer.done()
        assert driver.state == DriverState.STOPPED
        assert driver.engine.tick == 0
        assert [s.tick for s in seen] == [0]

    @pytest.mark.asyncio
    async def test_restart_discards_previous_run(self, fixed_workload):
        driver = SimulationDriver(config(tick_interval=30), generator=fixed_workload([4, 6, 8, 10, 15]))
        first_timer = driver.start()
        first_engine = driver.engine

        driver.config = config(tick_interval=0)
        second_timer = driver.start()
        results = await driver.wait()
        await asyncio.sleep(0)

        assert first_timer.cancelled()
        assert second_timer.done()
        assert driver.engine is not first_engine
        assert first_engine.tick == 0
        assert results.ticks == 2
        assert driver.state == DriverState.COMPLETED

    @pytest.mark.asyncio
    async def test_stop_after_completion_keeps_completed_state(self, fixed_workload):
        driver = SimulationDriver(config(), generator=fixed_workload([4, 6, 8, 10, 15]))
        driver.start()
        await driver.wait()

        await driver.stop()

        assert driver.state == DriverState.COMPLETED
