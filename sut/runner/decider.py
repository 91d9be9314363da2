"""Execution decider - decides whether a unit test block runs.

The decision is a pure function of the selection spec, the module name and
the block name. Exclusion always wins over inclusion.
"""

from enum import Enum
from typing import Optional

from ..selection.schema import SelectionSpec


class ExecutionMode(str, Enum):
    """Context in which unit tests are running."""
    ALL = "All"
    SELECTION = "Selection"


def execution_mode(spec: Optional[SelectionSpec]) -> ExecutionMode:
    """Selection if any include/exclude entry exists, otherwise All."""
    if spec is None or spec.is_empty:
        return ExecutionMode.ALL
    return ExecutionMode.SELECTION


def should_execute(spec: Optional[SelectionSpec], module: str, test_name: str) -> bool:
    """Decide whether a unit test block should run.

    Args:
        spec: Merged selection spec (None = no selections).
        module: Name of the module containing the block.
        test_name: Name of the block.

    Returns:
        True to execute the block, False to skip it.
    """
    if execution_mode(spec) is ExecutionMode.ALL:
        return True

    if module in spec.excluded_modules or test_name in spec.excluded_tests:
        return False

    if spec.included_modules and module in spec.included_modules:
        return True

    if spec.included_tests and test_name in spec.included_tests:
        return True

    # Only exclusions were given
    if not spec.has_inclusions:
        return True

    return False


class ExecutionDecider:
    """Decides block execution against one immutable selection spec."""

    def __init__(self, spec: Optional[SelectionSpec] = None):
        self.spec = spec or SelectionSpec()
        self.mode = execution_mode(self.spec)

    def decide(self, module: str, test_name: str) -> bool:
        return should_execute(self.spec, module, test_name)
