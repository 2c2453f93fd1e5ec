import json
import logging
from pathlib import Path
from typing import Iterator, Sequence, Union

from pydantic import ValidationError

from onestroke.core.exceptions import InvalidLevel
from onestroke.schemas import Level, Node, Edge

logger = logging.getLogger(__name__)


class LevelCatalog:
    """ Ordered, non-empty table of levels. Selection wraps around at the end"""

    def __init__(self, levels: Sequence[Level]):
        if not levels:
            raise InvalidLevel("level catalog is empty")
        self._levels = tuple(levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> Level:
        return self._levels[index]

    def __iter__(self) -> Iterator[Level]:
        return iter(self._levels)

    def names(self) -> list[str]:
        return [level.name for level in self._levels]

    def next_index(self, current: int) -> int:
        return (current + 1) % len(self._levels)

    @classmethod
    def from_data(cls, data: list[dict], skip_invalid: bool = False) -> "LevelCatalog":
        """
        Build a catalog from raw level dicts (name, nodes, edges).
        A broken level raises InvalidLevel, or is logged and left out when skip_invalid is set.
        """
        if not isinstance(data, list):
            raise InvalidLevel("level catalog must be a list of levels")

        levels = []
        for position, raw in enumerate(data):
            name = raw.get("name") if isinstance(raw, dict) else None
            name = name or f"#{position}"
            try:
                levels.append(Level.model_validate(raw))
            except (InvalidLevel, ValidationError) as e:
                if isinstance(e, InvalidLevel) and e.level_name:
                    error = e
                else:
                    error = InvalidLevel(str(e), level_name=name)
                if not skip_invalid:
                    if error is e:
                        raise
                    raise error from e
                logger.error("Skipping level %s: %s", name, error)

        logger.info("Loaded %d of %d levels", len(levels), len(data))
        return cls(levels)

    @classmethod
    def from_json(cls, path: Union[str, Path], skip_invalid: bool = False) -> "LevelCatalog":
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidLevel(f"can not read level catalog {path}: {e}") from e
        return cls.from_data(data, skip_invalid=skip_invalid)


def default_catalog() -> LevelCatalog:
    """ The shipped levels. Coordinates are in [-0.5, 0.5] around the canvas center"""
    return LevelCatalog([
        Level(
            name="Triangle",
            nodes=(
                Node(x=0.0, y=-0.4),
                Node(x=-0.4, y=0.3),
                Node(x=0.4, y=0.3),
            ),
            edges=(
                Edge(start=0, end=1),
                Edge(start=1, end=2),
                Edge(start=2, end=0),
            ),
        ),
        Level(
            name="Square",
            nodes=(
                Node(x=-0.35, y=-0.35),
                Node(x=0.35, y=-0.35),
                Node(x=0.35, y=0.35),
                Node(x=-0.35, y=0.35),
            ),
            edges=(
                Edge(start=0, end=1),
                Edge(start=1, end=2),
                Edge(start=2, end=3),
                Edge(start=3, end=0),
            ),
        ),
        Level(
            name="Pentagon",
            nodes=(
                Node(x=0.0, y=-0.45),
                Node(x=0.425, y=-0.15),
                Node(x=0.25, y=0.4),
                Node(x=-0.25, y=0.4),
                Node(x=-0.425, y=-0.15),
            ),
            edges=(
                Edge(start=0, end=1),
                Edge(start=1, end=2),
                Edge(start=2, end=3),
                Edge(start=3, end=4),
                Edge(start=4, end=0),
            ),
        ),
    ])
