from pydantic import BaseModel, ConfigDict, Field, model_validator

from onestroke.core.exceptions import InvalidLevel

EdgeKey = tuple[int, int]


def edge_key(a: int, b: int) -> EdgeKey:
    """ Unordered pair of node indexes as (smaller, larger)"""
    return (a, b) if a <= b else (b, a)


class Edge(BaseModel):
    """ Undirected connection, serialized as {"from": .., "to": ..}"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: int = Field(alias="from")
    end: int = Field(alias="to")

    @model_validator(mode="after")
    def check_not_loop(self):
        if self.start == self.end:
            raise InvalidLevel(f"edge {self.start}-{self.end} is a self-loop")
        return self

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.start, self.end)
