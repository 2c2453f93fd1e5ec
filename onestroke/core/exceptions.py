from typing import Optional


class OneStrokeError(Exception):
    """Base class for all errors raised by onestroke"""


class InvalidLevel(OneStrokeError):
    """
    Raised when a level or a level catalog can not be built.
    Only happens while levels are constructed or loaded, never during play.
    """

    def __init__(self, message: str, level_name: Optional[str] = None):
        self.level_name = level_name
        if level_name:
            message = f"Level '{level_name}': {message}"
        super().__init__(message)
