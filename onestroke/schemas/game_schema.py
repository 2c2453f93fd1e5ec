from typing import Literal

from pydantic import BaseModel, Field

from onestroke.schemas.trace_schema import TraceEvent, TraceSnapshot, HintResult


class CursorUpdate(BaseModel):
    x: float
    y: float


# screen pointer event, resolved to a node on the server
class PointerEvent(BaseModel):
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    phase: Literal["move", "release"] = "move"


class GameResponse(BaseModel):
    events: list[TraceEvent]
    state: TraceSnapshot


class HintResponse(GameResponse):
    hint: HintResult


class LevelSummary(BaseModel):
    index: int
    name: str
    node_count: int
    edge_count: int
