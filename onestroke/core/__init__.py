from onestroke.core.exceptions import OneStrokeError, InvalidLevel
