import pytest

from onestroke.schemas import Edge, Level, Node
from onestroke.services import LevelCatalog, ManualScheduler, TraceEngine


def make_level(name, coords, pairs) -> Level:
    return Level(
        name=name,
        nodes=tuple(Node(x=x, y=y) for x, y in coords),
        edges=tuple(Edge(start=a, end=b) for a, b in pairs),
    )


@pytest.fixture
def triangle() -> Level:
    return make_level("Triangle", [(0.0, -0.4), (-0.4, 0.3), (0.4, 0.3)], [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def single_edge() -> Level:
    return make_level("Stick", [(-0.3, 0.0), (0.3, 0.0)], [(0, 1)])


@pytest.fixture
def house() -> Level:
    # square with a roof and one diagonal: nodes 0 and 3 have odd degree
    return make_level(
        "House",
        [(-0.3, 0.3), (0.3, 0.3), (0.3, -0.1), (-0.3, -0.1), (0.0, -0.4)],
        [(0, 1), (1, 2), (2, 3), (3, 0), (3, 4), (4, 2), (0, 2)],
    )


@pytest.fixture
def catalog(triangle, single_edge, house) -> LevelCatalog:
    return LevelCatalog([triangle, single_edge, house])


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def engine(catalog, scheduler) -> TraceEngine:
    return TraceEngine(catalog, scheduler, success_delay=2.0, hint_count=2)
