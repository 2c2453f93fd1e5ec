import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from onestroke.schemas import (
    EdgeKey, EventKind, HintResult, Level, Phase, Point, TraceEvent, TraceSnapshot, VisualEffect, edge_key
)
from onestroke.services.effects import failure_effects, success_effects
from onestroke.services.level_catalog import LevelCatalog
from onestroke.services.scheduler import ManualScheduler, ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

Listener = Callable[[TraceEvent], None]

HINT_TEXT = "Look for nodes with an odd number of connections - these are often good starting/ending points!"
NO_HINT_TEXT = "You have no more hints left!"
EVEN_HINT_TEXT = "Every node has an even number of connections, start anywhere and finish where you started."


def hint_message(level: Level) -> str:
    odd = level.odd_nodes()
    if not odd:
        return f"{HINT_TEXT} {EVEN_HINT_TEXT}"
    return f"{HINT_TEXT} Try nodes {', '.join(str(n) for n in odd)}."


class TraceEngine:
    """
    Tracing session for one level at a time.

    The host resolves pointer positions to node indexes and feeds them in with
    begin_or_continue(), end_stroke() on release. Invalid gestures are ignored,
    never raised. Every call returns the events it produced; subscribers get
    the same events, plus the ones fired later by the scheduler.
    """

    def __init__(
            self,
            catalog: LevelCatalog,
            scheduler: Optional[Scheduler] = None,
            *,
            start_index: int = 0,
            success_delay: float = 2.0,
            hint_count: int = 2,
            auto_advance: bool = True,
    ):
        if not 0 <= start_index < len(catalog):
            raise IndexError(f"start level {start_index} not in catalog of {len(catalog)}")
        self.catalog = catalog
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.success_delay = success_delay
        self.auto_advance = auto_advance

        self._level_index = start_index
        self._path: list[int] = []
        self._completed: set[EdgeKey] = set()
        self._drawing = False
        self._cursor_point: Optional[Point] = None
        self._phase = Phase.IDLE
        self._hints_remaining = hint_count

        self._generation = 0 # bumped on every reset, stale timers compare against it
        self._pending_advance: Optional[ScheduledCall] = None
        self._listeners: list[Listener] = []
        self._recorders: list[list[TraceEvent]] = []

    # --- observable state ---

    @property
    def level(self) -> Level:
        return self.catalog[self._level_index]

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def path(self) -> tuple[int, ...]:
        return tuple(self._path)

    @property
    def completed_edges(self) -> frozenset[EdgeKey]:
        return frozenset(self._completed)

    @property
    def drawing(self) -> bool:
        return self._drawing

    @property
    def cursor_point(self) -> Optional[Point]:
        return self._cursor_point

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def solved(self) -> bool:
        return self._phase == Phase.SOLVED

    @property
    def hints_remaining(self) -> int:
        return self._hints_remaining

    @property
    def has_pending_advance(self) -> bool:
        return self._pending_advance is not None

    def snapshot(self) -> TraceSnapshot:
        level = self.level
        return TraceSnapshot(
            level_index=self._level_index,
            level_name=level.name,
            phase=self._phase,
            path=tuple(self._path),
            completed_edges=tuple(sorted(self._completed)),
            drawing=self._drawing,
            cursor_point=self._cursor_point,
            hints_remaining=self._hints_remaining,
            edge_count=level.edge_count,
        )

    # --- subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """ Register a listener, returns a callable that removes it again"""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @contextmanager
    def recording(self) -> Iterator[list[TraceEvent]]:
        """ Collect every event emitted inside the with block"""
        events: list[TraceEvent] = []
        self._recorders.append(events)
        try:
            yield events
        finally:
            self._recorders.remove(events)

    # --- pointer input ---

    def begin_or_continue(self, node_index: int) -> list[TraceEvent]:
        """ Pointer is over node_index. Starts an attempt or extends the path along an untraced edge"""
        events: list[TraceEvent] = []
        level = self.level

        if self._phase == Phase.SOLVED:
            logger.debug("Level %s already solved, ignoring node %s", level.name, node_index)
            return events
        if not level.has_node(node_index):
            logger.warning("Ignoring node %s, level %s has %d nodes", node_index, level.name, level.node_count)
            return events

        if not self._drawing:
            self._path = [node_index]
            self._drawing = True
            self._phase = Phase.DRAWING
            logger.info("Attempt started on %s at node %s", level.name, node_index)
            self._emit(events, EventKind.PATH_STARTED, node=node_index)
            return events

        last = self._path[-1]
        if node_index == last:
            return events

        key = edge_key(last, node_index)
        if not level.edge_exists(last, node_index):
            logger.debug("No edge %s-%s in %s", last, node_index, level.name)
            return events
        if key in self._completed:
            logger.debug("Edge %s-%s already traced", *key)
            return events

        self._path.append(node_index)
        self._completed.add(key)
        self._emit(events, EventKind.EDGE_COMPLETED, node=node_index, edge=key)

        if level.is_complete(self._completed):
            self._solve(events)
        return events

    def update_cursor(self, point: Point) -> bool:
        """ Remember the pointer position for the in-progress segment. Ignored unless drawing"""
        if not self._drawing:
            return False
        x, y = point
        self._cursor_point = (float(x), float(y))
        return True

    def end_stroke(self) -> list[TraceEvent]:
        """ Pointer released. An unfinished path fails and the attempt starts over"""
        events: list[TraceEvent] = []
        if self._phase == Phase.SOLVED:
            return events
        if not self._path:
            # tap that never hit a node
            return events
        if self.level.is_complete(self._completed):
            self._solve(events)
            return events

        self._reset(events, flag_failure=True)
        return events

    # --- explicit control ---

    def reset_attempt(self, flag_failure: bool = False) -> list[TraceEvent]:
        """
        Clear the current attempt. flag_failure only decides which event is emitted,
        attempt_failed needs a started path as well. The resulting state is the same.
        A solved level is kept until the next level loads.
        """
        events: list[TraceEvent] = []
        if self._phase == Phase.SOLVED:
            logger.debug("Level %s solved, ignoring reset", self.level.name)
            return events
        self._reset(events, flag_failure=flag_failure)
        return events

    def advance_level(self) -> list[TraceEvent]:
        return self.load_level(self.catalog.next_index(self._level_index))

    def load_level(self, index: int) -> list[TraceEvent]:
        """ Switch to catalog level index. Always starts from a clean session"""
        if not 0 <= index < len(self.catalog):
            raise IndexError(f"level {index} not in catalog of {len(self.catalog)}")
        events: list[TraceEvent] = []
        self._clear()
        self._level_index = index
        logger.info("Loaded level %d: %s", index, self.level.name)
        self._emit(events, EventKind.LEVEL_LOADED)
        return events

    def use_hint(self) -> HintResult:
        """ Spend a hint. Hints are independent from the trace and never touch it"""
        if self._hints_remaining > 0:
            self._hints_remaining -= 1
            result = HintResult(
                granted=True,
                remaining=self._hints_remaining,
                title="Hint",
                message=hint_message(self.level),
                nodes=tuple(self.level.odd_nodes()),
            )
        else:
            result = HintResult(granted=False, remaining=0, title="Out of Hints", message=NO_HINT_TEXT)
        self._emit([], EventKind.HINT_USED, message=result.message)
        return result

    # --- transitions ---

    def _solve(self, events: list[TraceEvent]) -> None:
        self._phase = Phase.SOLVED
        self._drawing = False
        self._cursor_point = None
        logger.info("Level %s solved with path %s", self.level.name, self._path)
        self._emit(events, EventKind.LEVEL_SOLVED, effects=success_effects(self.success_delay))

        if self.auto_advance:
            generation = self._generation
            self._pending_advance = self.scheduler.call_later(
                self.success_delay, lambda: self._advance_after_success(generation)
            )

    def _advance_after_success(self, generation: int) -> None:
        if generation != self._generation or self._phase != Phase.SOLVED:
            logger.debug("Dropping stale advance for generation %s", generation)
            return
        self._pending_advance = None
        self.advance_level()

    def _reset(self, events: list[TraceEvent], flag_failure: bool) -> None:
        failed = flag_failure and bool(self._path)
        traced = len(self._completed)
        self._clear()
        if failed:
            logger.info("Attempt failed on %s, %d of %d edges traced", self.level.name, traced, self.level.edge_count)
            self._emit(
                events,
                EventKind.ATTEMPT_FAILED,
                message=f"{traced} of {self.level.edge_count} edges traced",
                effects=failure_effects(),
            )
        else:
            self._emit(events, EventKind.ATTEMPT_RESET)

    def _clear(self) -> None:
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None
        self._generation += 1
        self._path = []
        self._completed = set()
        self._drawing = False
        self._cursor_point = None
        self._phase = Phase.IDLE

    def _emit(
            self,
            events: list[TraceEvent],
            kind: EventKind,
            node: Optional[int] = None,
            edge: Optional[EdgeKey] = None,
            message: Optional[str] = None,
            effects: tuple[VisualEffect, ...] = (),
    ) -> TraceEvent:
        event = TraceEvent(
            kind=kind,
            level_index=self._level_index,
            level_name=self.level.name,
            node=node,
            edge=edge,
            message=message,
            effects=effects,
        )
        events.append(event)
        for recorder in self._recorders:
            recorder.append(event)
        for listener in list(self._listeners):
            listener(event)
        return event
