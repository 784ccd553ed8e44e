# greedysched/simulation/event.py

from enum import Enum
from pydantic import BaseModel
from typing import Any, Dict


class EventType(str, Enum):
    TICK = "tick"
    COMPLETED = "completed"
    STOPPED = "stopped"


class Event(BaseModel):
    type: EventType
    payload: Any   # TickSnapshot, or SimulationResults for COMPLETED

    def to_message(self) -> Dict[str, Any]:
        """Flat JSON-ready dict: {"type": ..., **payload}."""
        return {"type": self.type.value, **self.payload.model_dump()}


def make_event(type: EventType, payload: BaseModel) -> Event:
    return Event(type=type, payload=payload)
