"""Module manifest loader.

The host lists every module it knows about in a YAML file, either as a
plain list or under a `modules` key:

    modules:
      - app.math
      - app.strings
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..selection.schema import ConfigNotFoundError, ConfigReadError


def load_module_manifest(file_path: Union[str, Path]) -> list[str]:
    """Load known module names from a YAML manifest.

    Args:
        file_path: Path to the manifest file.

    Returns:
        Module names, duplicates removed, in file order.

    Raises:
        ConfigNotFoundError: If the manifest doesn't exist.
        ConfigReadError: If the file can't be read or isn't valid YAML.
        ValueError: If the YAML doesn't hold a list of module names.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise ConfigNotFoundError(f"Module manifest not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigReadError(f"Failed to read module manifest {file_path}: {e}") from e

    return parse_module_manifest(data, source=str(file_path))


def parse_module_manifest(data: Any, source: str = "<inline>") -> list[str]:
    """Extract module names from already loaded YAML data."""
    if data is None:
        return []

    if isinstance(data, dict):
        if "modules" not in data:
            raise ValueError(f"Missing required field 'modules' in {source}")
        data = data["modules"] or []

    if not isinstance(data, list):
        raise ValueError(f"'modules' must be a list in {source}, got {type(data).__name__}")

    names: list[str] = []
    for i, item in enumerate(data):
        if not isinstance(item, str):
            raise ValueError(f"modules[{i}] must be a string in {source}")
        name = item.strip()
        if name:
            names.append(name)

    return list(dict.fromkeys(names))
