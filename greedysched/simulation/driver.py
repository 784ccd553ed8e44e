# greedysched/simulation/driver.py

import asyncio
import inspect
import logging
import time
from enum import Enum
from typing import AsyncIterator, Callable, Optional

from greedysched.api import SimulationConfig, SimulationResults, TickSnapshot
from greedysched.simulation.engine import AllocationEngine
from greedysched.simulation.workload_generator import WorkloadGenerator


class DriverState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"


class SimulationDriver:
    """
    Calls AllocationEngine.step() once per tick_interval and forwards every
    snapshot to the renderer. Each start() discards the previous run.

    Three ways to drive a run:
        start()     -- background asyncio task, snapshots go to on_snapshot
        run_live()  -- async iterator of snapshots
        run()       -- blocking loop, returns the results
    """

    def __init__(
        self,
        config: SimulationConfig,
        generator: Optional[WorkloadGenerator] = None,
        clock: Callable[[], float] = time.monotonic,
        on_snapshot: Optional[Callable[[TickSnapshot], object]] = None,
    ):
        self.config = config
        self.generator = generator
        self.clock = clock
        self.on_snapshot = on_snapshot
        self.state = DriverState.IDLE
        self.engine: Optional[AllocationEngine] = None
        self._timer: Optional[asyncio.Task] = None
        self._stop_requested = False

    # ------------------------------
    # Run lifecycle
    # ------------------------------
    def _begin_run(self) -> AllocationEngine:
        self._cancel_timer()
        self._stop_requested = False
        self.engine = AllocationEngine.from_config(
            self.config, generator=self.generator, clock=self.clock
        )
        self.state = DriverState.RUNNING
        logging.info(
            f"Simulation started: {self.config.worker_count} workers, "
            f"{self.config.task_count} tasks, real_time={self.config.real_time}"
        )
        return self.engine

    def _finish(self, engine: AllocationEngine):
        # a run replaced by a newer start() must not touch the new run's state
        if not self._is_current(engine):
            return
        self.state = DriverState.COMPLETED
        results = engine.collect_results()
        logging.info(
            f"Simulation completed after {results.ticks} ticks, "
            f"makespan={results.makespan}, fairness={results.fairness}"
        )

    def _is_current(self, engine: AllocationEngine) -> bool:
        return engine is self.engine and not self._stop_requested

    def _cancel_timer(self):
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def start(self) -> asyncio.Task:
        """Begin a fresh run on the running event loop."""
        engine = self._begin_run()
        self._timer = asyncio.get_running_loop().create_task(self._drive(engine))
        return self._timer

    async def stop(self):
        """Tear down the current run. The only way to cancel a simulation."""
        self._stop_requested = True
        timer = self._timer
        self._cancel_timer()
        if timer is not None:
            try:
                await timer
            except asyncio.CancelledError:
                logging.debug("Simulation timer cancelled")
        if self.state == DriverState.RUNNING:
            self.state = DriverState.STOPPED
            logging.info("Simulation stopped before completion")

    async def wait(self) -> Optional[SimulationResults]:
        """Wait for the background run started by start() to finish."""
        if self._timer is not None:
            await self._timer
        return self.engine.collect_results() if self.engine else None

    # ------------------------------
    # Tick loops
    # ------------------------------
    async def _ticks(self, engine: AllocationEngine) -> AsyncIterator[TickSnapshot]:
        loop = asyncio.get_running_loop()
        interval = self.config.tick_interval

        # idle workers are rendered before the first tick
        yield engine.snapshot()

        # deadline based: a slow consumer delays ticks but never drops one
        next_tick = loop.time()
        while self._is_current(engine):
            next_tick += interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            if not self._is_current(engine):
                break
            snapshot = engine.step()
            yield snapshot
            if snapshot.completed:
                break

    async def _drive(self, engine: AllocationEngine):
        async for snapshot in self._ticks(engine):
            await self._emit(snapshot)
        self._finish(engine)

    async def run_live(self) -> AsyncIterator[TickSnapshot]:
        """Fresh run, yielding the idle snapshot then one snapshot per tick."""
        engine = self._begin_run()
        async for snapshot in self._ticks(engine):
            yield snapshot
        self._finish(engine)

    def run(self) -> SimulationResults:
        """Blocking run; on_snapshot must be a plain function here."""
        engine = self._begin_run()
        self._emit_sync(engine.snapshot())

        while True:
            if self.config.tick_interval:
                time.sleep(self.config.tick_interval)
            snapshot = engine.step()
            self._emit_sync(snapshot)
            if snapshot.completed:
                break

        self._finish(engine)
        return engine.collect_results()

    # ------------------------------
    # Renderer callback
    # ------------------------------
    async def _emit(self, snapshot: TickSnapshot):
        if self.on_snapshot is None:
            return
        result = self.on_snapshot(snapshot)
        if inspect.isawaitable(result):
            await result

    def _emit_sync(self, snapshot: TickSnapshot):
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)
