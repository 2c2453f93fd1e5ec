from collections import Counter
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from onestroke.core.exceptions import InvalidLevel
from onestroke.schemas.node_schema import Node
from onestroke.schemas.edge_schema import Edge, EdgeKey, edge_key


class Level(BaseModel):
    """
    Immutable puzzle description: an ordered node list and the edges between them.
    Node order is significant, edges refer to nodes by position.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]

    @model_validator(mode="after")
    def check_topology(self):
        """ Every edge must point at existing nodes and each pair may appear once"""
        node_count = len(self.nodes)
        for edge in self.edges:
            for index in (edge.start, edge.end):
                if not 0 <= index < node_count:
                    raise InvalidLevel(
                        f"edge {edge.start}-{edge.end} references node {index}, "
                        f"level has {node_count} nodes",
                        level_name=self.name,
                    )

        duplicates = [key for key, count in Counter(e.key for e in self.edges).items() if count > 1]
        if duplicates:
            a, b = duplicates[0]
            raise InvalidLevel(f"edge {a}-{b} is listed more than once", level_name=self.name)
        return self

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def edge_keys(self) -> frozenset[EdgeKey]:
        return frozenset(edge.key for edge in self.edges)

    def has_node(self, index: int) -> bool:
        return 0 <= index < len(self.nodes)

    def edge_exists(self, a: int, b: int) -> bool:
        """ True if {a, b} is an edge of this level, in either direction"""
        key = edge_key(a, b)
        return any(edge.key == key for edge in self.edges)

    def is_complete(self, completed_edges: Iterable[EdgeKey]) -> bool:
        # completed edges are always a subset of the level's edges
        return len(set(completed_edges)) == len(self.edges)

    def degree(self, index: int) -> int:
        return sum(1 for edge in self.edges if index in (edge.start, edge.end))

    def odd_nodes(self) -> list[int]:
        """ Nodes with an odd number of edges. A one-stroke trace starts and ends on them"""
        return [index for index in range(len(self.nodes)) if self.degree(index) % 2 == 1]
