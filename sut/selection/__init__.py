"""Selection module - selection configuration parsing."""

from .schema import (
    ConfigError,
    ConfigNotFoundError,
    ConfigReadError,
    SelectionEntry,
    SelectionKind,
    SelectionSpec,
    UnknownEntry,
    ValidationError,
    ValidationResult,
)
from .parser import (
    CONFIG_ENV_VAR,
    config_paths_from_env,
    load_selection,
    load_selection_file,
    parse_selection_line,
    parse_selection_lines,
)
from .validator import validate_selection

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigReadError",
    "SelectionEntry",
    "SelectionKind",
    "SelectionSpec",
    "UnknownEntry",
    "ValidationError",
    "ValidationResult",
    "CONFIG_ENV_VAR",
    "config_paths_from_env",
    "load_selection",
    "load_selection_file",
    "parse_selection_line",
    "parse_selection_lines",
    "validate_selection",
]
