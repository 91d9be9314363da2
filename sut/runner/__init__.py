"""Runner module - selection, counting and block execution."""

from .decider import ExecutionDecider, ExecutionMode, execution_mode, should_execute
from .counter import AggregateCounters, ModuleRecord, Registry
from .engine import Outcome, SelectiveEngine
from .executor import (
    BlockExecutor,
    BlockFailure,
    ExecutionConfig,
    ExecutionResult,
    TestBlock,
)

__all__ = [
    "ExecutionDecider",
    "ExecutionMode",
    "execution_mode",
    "should_execute",
    "AggregateCounters",
    "ModuleRecord",
    "Registry",
    "Outcome",
    "SelectiveEngine",
    "BlockExecutor",
    "BlockFailure",
    "ExecutionConfig",
    "ExecutionResult",
    "TestBlock",
]
