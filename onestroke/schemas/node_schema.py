from pydantic import BaseModel, ConfigDict, model_validator

from onestroke.core.exceptions import InvalidLevel

# normalized level coordinates are origin centered
COORDINATE_LIMIT = 0.5


class Node(BaseModel):
    """ A selectable point. Its index is its position in the level's node list"""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @model_validator(mode="after")
    def check_normalized(self):
        for value in (self.x, self.y):
            if not -COORDINATE_LIMIT <= value <= COORDINATE_LIMIT:
                raise InvalidLevel(f"node coordinate {value} outside [-0.5, 0.5]")
        return self
