from onestroke.schemas.node_schema import Node
from onestroke.schemas.edge_schema import Edge, EdgeKey, edge_key
from onestroke.schemas.level_schema import Level
from onestroke.schemas.trace_schema import (
    Phase, EventKind, VisualEffect, TraceEvent, TraceSnapshot, HintResult, Point
)
from onestroke.schemas.game_schema import CursorUpdate, PointerEvent, GameResponse, HintResponse, LevelSummary
