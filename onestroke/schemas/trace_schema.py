from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from onestroke.schemas.edge_schema import EdgeKey

Point = tuple[float, float]


class Phase(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    SOLVED = "solved"


class EventKind(str, Enum):
    PATH_STARTED = "path_started"
    EDGE_COMPLETED = "edge_completed"
    LEVEL_SOLVED = "level_solved"
    ATTEMPT_FAILED = "attempt_failed"
    ATTEMPT_RESET = "attempt_reset"
    LEVEL_LOADED = "level_loaded"
    HINT_USED = "hint_used"


class VisualEffect(BaseModel):
    """ Timed request for the host to play an animation. delay is relative to the event"""
    model_config = ConfigDict(frozen=True)

    name: str
    delay: float = 0.0
    duration: float
    params: dict[str, Any] = Field(default_factory=dict)


class TraceEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: EventKind
    level_index: int
    level_name: str
    node: Optional[int] = None
    edge: Optional[EdgeKey] = None
    message: Optional[str] = None
    effects: tuple[VisualEffect, ...] = ()


class TraceSnapshot(BaseModel):
    """ Everything a renderer needs to draw the current attempt"""
    model_config = ConfigDict(frozen=True)

    level_index: int
    level_name: str
    phase: Phase
    path: tuple[int, ...]
    completed_edges: tuple[EdgeKey, ...] # sorted
    drawing: bool
    cursor_point: Optional[Point] = None
    hints_remaining: int
    edge_count: int

    @property
    def solved(self) -> bool:
        return self.phase == Phase.SOLVED


class HintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    granted: bool
    remaining: int
    title: str
    message: str
    nodes: tuple[int, ...] = () # suggested start/end nodes
