# import moduls/libraries
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

# import form project
from onestroke.core.config import settings
from onestroke.core.game import get_engine
from onestroke.schemas import (
    CursorUpdate, GameResponse, HintResponse, LevelSummary, PointerEvent, TraceSnapshot
)
from onestroke.services import TraceEngine, Viewport, nearest_node
from onestroke.visualization import generate_trace_visualization

# all routes are async: requests run one after another on the event loop, in arrival order
router = APIRouter()


def game_response(engine: TraceEngine, events) -> GameResponse:
    return GameResponse(events=events, state=engine.snapshot())


# Current state
@router.get("/state", response_model=TraceSnapshot)
async def get_state(engine: TraceEngine = Depends(get_engine)):
    """Snapshot of the current attempt"""
    return engine.snapshot()


# Level list
@router.get("/levels", response_model=list[LevelSummary])
async def get_levels(engine: TraceEngine = Depends(get_engine)):
    """List the level catalog in play order"""
    return [
        LevelSummary(index=i, name=level.name, node_count=level.node_count, edge_count=level.edge_count)
        for i, level in enumerate(engine.catalog)
    ]


# Select level
@router.post("/levels/{level_index}", response_model=GameResponse)
async def select_level(level_index: int, engine: TraceEngine = Depends(get_engine)):
    """Jump to a level of the catalog"""
    if not 0 <= level_index < len(engine.catalog):
        raise HTTPException(status_code=404, detail="Level not found")
    with engine.recording() as events:
        engine.load_level(level_index)
    return game_response(engine, events)


# Pointer entered a node (already hit tested by the client)
@router.post("/node/{node_index}", response_model=GameResponse)
async def enter_node(node_index: int, engine: TraceEngine = Depends(get_engine)):
    """Start or extend the path"""
    with engine.recording() as events:
        engine.begin_or_continue(node_index)
    return game_response(engine, events)


# Pointer moved, normalized level coordinates
@router.post("/cursor", response_model=GameResponse)
async def move_cursor(cursor: CursorUpdate, engine: TraceEngine = Depends(get_engine)):
    """Update the in-progress segment"""
    engine.update_cursor((cursor.x, cursor.y))
    return game_response(engine, [])


# Raw screen pointer event, hit tested here
@router.post("/pointer", response_model=GameResponse)
async def pointer(event: PointerEvent, engine: TraceEngine = Depends(get_engine)):
    """Resolve a screen point to a node and feed it to the engine"""
    viewport = Viewport(event.width, event.height, settings.CANVAS_SCALE)
    with engine.recording() as events:
        if event.phase == "release":
            engine.end_stroke()
        else:
            node_index = nearest_node(engine.level, (event.x, event.y), viewport, settings.NODE_HIT_RADIUS)
            if node_index is not None:
                engine.begin_or_continue(node_index)
            if not viewport.is_empty:
                engine.update_cursor(viewport.to_normalized((event.x, event.y)))
    return game_response(engine, events)


# Pointer released
@router.post("/release", response_model=GameResponse)
async def release(engine: TraceEngine = Depends(get_engine)):
    """End the stroke, an unfinished path fails"""
    with engine.recording() as events:
        engine.end_stroke()
    return game_response(engine, events)


@router.post("/reset", response_model=GameResponse)
async def reset(
    engine: TraceEngine = Depends(get_engine),
    flag_failure: bool = Query(False, description="Report the reset as a failed attempt")
):
    """Clear the current attempt"""
    with engine.recording() as events:
        engine.reset_attempt(flag_failure)
    return game_response(engine, events)


@router.post("/advance", response_model=GameResponse)
async def advance(engine: TraceEngine = Depends(get_engine)):
    """Load the next level, wrapping around"""
    with engine.recording() as events:
        engine.advance_level()
    return game_response(engine, events)


@router.post("/hint", response_model=HintResponse)
async def hint(engine: TraceEngine = Depends(get_engine)):
    """Spend one hint"""
    with engine.recording() as events:
        result = engine.use_hint()
    return HintResponse(events=events, state=engine.snapshot(), hint=result)


# Plotly figure of the current state
@router.get("/figure")
async def get_figure(engine: TraceEngine = Depends(get_engine)):
    """Get the current level and trace as plotly JSON"""
    fig = generate_trace_visualization(engine.level, engine.snapshot())
    return Response(content=fig.to_json(), media_type="application/json")
