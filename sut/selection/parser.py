"""Selection configuration parser.

Parses line-based selection files into a SelectionSpec:

    utb:<name>    run unit test block <name>
    xutb:<name>   skip unit test block <name>
    utm:<name>    run every block in module <name>
    xutm:<name>   skip every block in module <name>
"""

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .schema import (
    ConfigNotFoundError,
    ConfigReadError,
    PREFIXES,
    SelectionEntry,
    SelectionSpec,
    UnknownEntry,
)

CONFIG_ENV_VAR = "SUT_CONFIG"

PathLike = Union[str, Path]


def load_selection(paths: Sequence[PathLike]) -> SelectionSpec:
    """Load and merge one or more selection files.

    Args:
        paths: Configuration file paths. An empty sequence yields an
            empty spec (All mode).

    Returns:
        Merged SelectionSpec.

    Raises:
        ConfigNotFoundError: If a path does not exist.
        ConfigReadError: If an existing path cannot be read.
    """
    spec = SelectionSpec()
    for path in paths:
        spec = spec.merge(load_selection_file(path))
    return spec


def load_selection_file(file_path: PathLike) -> SelectionSpec:
    """Parse a single selection file."""
    file_path = Path(file_path)

    if not file_path.exists():
        raise ConfigNotFoundError(f"Selection file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Failed to read selection file {file_path}: {e}") from e

    return parse_selection_lines(lines, source=str(file_path))


def parse_selection_lines(
    lines: Iterable[str], source: str = "<inline>"
) -> SelectionSpec:
    """Parse selection lines; malformed content never fails.

    Args:
        lines: Raw configuration lines.
        source: Source identifier attached to unknown entries.

    Returns:
        SelectionSpec for these lines.
    """
    entries: list[SelectionEntry] = []
    unknown: list[UnknownEntry] = []

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        kind = _match_prefix(line)
        if kind is None:
            unknown.append(UnknownEntry(line=line, source=source))
            continue

        entry = parse_selection_line(line)
        if entry is not None:
            entries.append(entry)

    return SelectionSpec.from_entries(entries, unknown)


def parse_selection_line(line: str) -> Optional[SelectionEntry]:
    """Parse one trimmed line.

    Returns:
        The entry, or None if the prefix is unknown or the value is blank.
    """
    line = line.strip()
    kind = _match_prefix(line)
    if kind is None:
        return None

    value = line[len(kind.prefix):].strip()
    if not value:
        return None
    return SelectionEntry(kind=kind, value=value)


def config_paths_from_env(environ: Optional[dict] = None) -> list[str]:
    """Read selection file paths from the SUT_CONFIG environment variable."""
    environ = os.environ if environ is None else environ
    raw = environ.get(CONFIG_ENV_VAR, "")
    return [p.strip() for p in raw.split(os.pathsep) if p.strip()]


def _match_prefix(line: str):
    for kind in PREFIXES:
        if line.startswith(kind.prefix):
            return kind
    return None
