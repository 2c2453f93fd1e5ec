"""One-stroke puzzle: trace every edge of a graph without lifting the finger."""

__version__ = "1.0.0"
