import pytest

from onestroke.services import Viewport, nearest_node

from conftest import make_level


def test_viewport_scale_uses_shorter_side():
    viewport = Viewport(800, 600)
    assert viewport.scale == pytest.approx(540)
    assert viewport.center == (400, 300)


def test_to_screen_and_back(triangle):
    viewport = Viewport(800, 600)
    top = triangle.nodes[0]  # (0.0, -0.4)
    assert viewport.to_screen(top) == pytest.approx((400, 300 - 0.4 * 540))
    assert viewport.to_normalized(viewport.to_screen(top)) == pytest.approx((0.0, -0.4))


def test_nearest_node_inside_radius(triangle):
    viewport = Viewport(800, 600)
    x, y = viewport.to_screen(triangle.nodes[2])
    assert nearest_node(triangle, (x + 10, y - 10), viewport, radius=36) == 2


def test_nothing_outside_radius(triangle):
    viewport = Viewport(800, 600)
    x, y = viewport.to_screen(triangle.nodes[2])
    assert nearest_node(triangle, (x + 40, y), viewport, radius=36) is None
    assert nearest_node(triangle, viewport.center, viewport, radius=36) is None


def test_nearest_wins_when_several_in_radius():
    level = make_level("Close", [(0.0, 0.0), (0.05, 0.0)], [(0, 1)])
    viewport = Viewport(1000, 1000)  # scale 900, nodes 45px apart
    x0, y0 = viewport.to_screen(level.nodes[0])
    assert nearest_node(level, (x0 + 30, y0), viewport, radius=36) == 1
    assert nearest_node(level, (x0 + 10, y0), viewport, radius=36) == 0


def test_ties_go_to_lowest_index():
    level = make_level("Close", [(0.0625, 0.0), (-0.0625, 0.0)], [(0, 1)])
    viewport = Viewport(1000, 1000, scale_ratio=1.0)  # both nodes exactly 62.5px from the center
    assert nearest_node(level, viewport.center, viewport, radius=100) == 0


def test_empty_viewport_resolves_nothing(triangle):
    assert nearest_node(triangle, (0, 0), Viewport(0, 0), radius=36) is None
