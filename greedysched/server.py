from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.websockets import WebSocketState
from pydantic import ValidationError
from functools import partial
from typing import Dict, Optional, Set
import asyncio
import json
import logging

from greedysched.api.schemas import SimulationConfig, TickSnapshot
from greedysched.config import API_HOST, API_PORT, LOG_FORMAT, LOG_LEVEL
from greedysched.simulation.driver import DriverState, SimulationDriver
from greedysched.simulation.event import EventType, make_event
from greedysched.store.run_store import RunStore

logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    force=True,  # override uvicorn's setup
)

app = FastAPI(title="greedysched")

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

driver: Optional[SimulationDriver] = None   # current run
subscribers: Set[asyncio.Queue] = set()     # one queue per connected websocket
store = RunStore()

FIELD_LABELS = {"worker_count": "Worker count", "task_count": "Task count"}
NOT_A_NUMBER = {"int_parsing", "int_type", "int_from_float", "missing"}


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """First validation message per field, worded for the input form."""
    errors = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "body"
        label = FIELD_LABELS.get(field)
        if label and err["type"] in NOT_A_NUMBER:
            message = f"{label} must be a number"
        else:
            message = err["msg"]
        errors.setdefault(field, message)
    return errors


def broadcast(message: dict):
    for queue in list(subscribers):
        queue.put_nowait(message)


async def forward_snapshot(run: SimulationDriver, snapshot: TickSnapshot):
    message = make_event(EventType.TICK, snapshot).to_message()
    await store.save_update(message)
    broadcast(message)

    if snapshot.completed:
        results = run.engine.collect_results()
        await store.save_results(results.model_dump())
        broadcast(make_event(EventType.COMPLETED, results).to_message())


async def stop_current_run():
    if driver is None or driver.state != DriverState.RUNNING:
        return
    await driver.stop()
    broadcast(make_event(EventType.STOPPED, driver.engine.snapshot()).to_message())


@app.post("/start-simulation")
async def start_simulation(request: Request):
    """
    Validate the form input and start a fresh run, discarding any previous one.
    Invalid input never reaches the simulation.
    """
    global driver
    try:
        body = await request.json()
    except ValueError:
        logging.info("Rejected simulation config: body is not valid JSON")
        return JSONResponse(status_code=422, content={"errors": {"body": "Request body must be valid JSON"}})

    try:
        config = SimulationConfig.model_validate(body)
    except ValidationError as exc:
        errors = field_errors(exc)
        logging.info(f"Rejected simulation config: {errors}")
        return JSONResponse(status_code=422, content={"errors": errors})

    await stop_current_run()
    await store.clear_run()

    driver = SimulationDriver(config)
    driver.on_snapshot = partial(forward_snapshot, driver)
    driver.start()

    return {"status": "simulation started"}


@app.post("/stop-simulation")
async def stop_simulation():
    await stop_current_run()
    return {"status": "simulation stopping"}


@app.get("/status")
async def get_status():
    if driver is None:
        return {"state": DriverState.IDLE.value}
    return {"state": driver.state.value, "tick": driver.engine.tick, "pending": driver.engine.pending_count}


@app.get("/results")
async def get_results():
    """
    Fetch last simulation results for frontend display.
    """
    results = await store.load_results()
    if results is None:
        return {"status": "no results yet"}
    return results


@app.post("/clear-results")
async def clear_results():
    await store.clear_run()
    return {"status": "cleared"}


@app.get("/history")
async def get_history():
    """
    Fetch every snapshot emitted by the current (or last) run.
    """
    return await store.load_updates()


@app.websocket("/ws/simulation")
async def simulation_ws(ws: WebSocket):
    await ws.accept()

    if driver is None:
        await ws.send_text(json.dumps({"error": "Simulation not started"}))
        await ws.close()
        return

    # replay what already happened, then follow the live run
    queue: asyncio.Queue = asyncio.Queue()
    for update in await store.load_updates():
        queue.put_nowait(update)
    if driver.state == DriverState.COMPLETED:
        queue.put_nowait(make_event(EventType.COMPLETED, driver.engine.collect_results()).to_message())
    elif driver.state == DriverState.STOPPED:
        queue.put_nowait(make_event(EventType.STOPPED, driver.engine.snapshot()).to_message())
    subscribers.add(queue)

    try:
        while True:
            message = await queue.get()
            await ws.send_text(json.dumps(message))
            if message["type"] != EventType.TICK.value:
                break
    except WebSocketDisconnect:
        logging.info("Simulation websocket disconnected")
    finally:
        subscribers.discard(queue)

    if ws.client_state == WebSocketState.CONNECTED:
        await ws.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
