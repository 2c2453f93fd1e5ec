"""
Host side geometry: normalized level coordinates <-> screen pixels, and node picking.
The engine never sees pixels, only the node index picked here.
"""
import math
from dataclasses import dataclass
from typing import Optional

from onestroke.schemas import Level, Node, Point


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    scale_ratio: float = 0.9

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def scale(self) -> float:
        return min(self.width, self.height) * self.scale_ratio

    @property
    def center(self) -> Point:
        return self.width / 2, self.height / 2

    def to_screen(self, node: Node) -> Point:
        cx, cy = self.center
        return node.x * self.scale + cx, node.y * self.scale + cy

    def to_normalized(self, point: Point) -> Point:
        cx, cy = self.center
        return (point[0] - cx) / self.scale, (point[1] - cy) / self.scale


def nearest_node(level: Level, point: Point, viewport: Viewport, radius: float) -> Optional[int]:
    """
    Index of the node closest to a screen point, if closer than radius pixels.
    Equal distances go to the lower index.
    """
    if viewport.is_empty:
        return None

    best_index, best_distance = None, radius
    for index, node in enumerate(level.nodes):
        sx, sy = viewport.to_screen(node)
        distance = math.hypot(point[0] - sx, point[1] - sy)
        if distance < best_distance:
            best_index, best_distance = index, distance
    return best_index
