"""Selective unit testing - run a chosen subset of unit test blocks."""

from .selection import ConfigError, SelectionSpec, load_selection
from .runner import ExecutionMode, Outcome, SelectiveEngine

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "SelectionSpec",
    "load_selection",
    "ExecutionMode",
    "Outcome",
    "SelectiveEngine",
    "__version__",
]
