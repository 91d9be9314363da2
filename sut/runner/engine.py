"""Selective unit test engine.

One engine instance is created per run and handed to every test block.
Each block calls begin_test() before its body and end_test() after it:

    if engine.begin_test(__name__, "add", 12):
        try:
            assert add(10, 1) == 11
        except Exception:
            engine.end_test(__name__, Outcome.FAILED)
            raise

A block counts as passing as soon as begin_test() lets it run; only a
failure has to be reported.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Iterable, Iterator, Optional

from ..reporting.report import ReportModel, build_report
from ..selection.schema import SelectionSpec
from .counter import AggregateCounters, ModuleRecord, Registry
from .decider import ExecutionDecider, ExecutionMode


class Outcome(str, Enum):
    """Outcome of an executed unit test block."""
    PASSED = "passed"
    FAILED = "failed"


class SelectiveEngine:
    """Selection and counting for a single sequential test run.

    Not thread-safe; blocks must run one at a time.
    """

    def __init__(
        self,
        spec: Optional[SelectionSpec] = None,
        selective: bool = True,
        known_modules: Iterable[str] = (),
    ):
        """Initialize the engine.

        Args:
            spec: Merged selection spec. None = run everything.
            selective: False disables filtering (every block runs).
            known_modules: All module names known to the host, used to list
                modules without unit tests.
        """
        self.spec = spec or SelectionSpec()
        self.selective = selective
        self.known_modules = list(known_modules)
        self._decider = ExecutionDecider(self.spec)
        self._registry = Registry()

    @property
    def mode(self) -> ExecutionMode:
        if not self.selective:
            return ExecutionMode.ALL
        return self._decider.mode

    @property
    def excluded_modules(self) -> frozenset[str]:
        """Modules excluded by the selection; none when filtering is off."""
        if not self.selective:
            return frozenset()
        return self.spec.excluded_modules

    @property
    def registry(self) -> Registry:
        return self._registry

    def begin_test(self, module: str, test_name: str, line: int = 0) -> bool:
        """Count a block and decide whether its body runs.

        Args:
            module: Name of the module containing the block.
            test_name: Name of the block.
            line: Source line of the block (informational).

        Returns:
            True if the body must run, False if it must be skipped.
        """
        record = self._registry.get_or_create(module)
        record.add_found()
        record.uses_hook = True

        if self.mode is ExecutionMode.SELECTION and not self._decider.decide(module, test_name):
            return False

        # Assume it passes; end_test() corrects this on failure
        record.add_passing()
        return True

    def end_test(self, module: str, outcome: Outcome = Outcome.PASSED) -> None:
        """Report the outcome of a block that begin_test() let run."""
        if outcome != Outcome.FAILED:
            return
        record = self._registry.get(module)
        if record is not None:
            record.add_failing()

    def count_unhooked(self, module: str) -> ModuleRecord:
        """Count a block that ran without calling begin_test()."""
        record = self._registry.get_or_create(module)
        record.add_found()
        record.add_passing()
        return record

    def add_elapsed(self, module: str, seconds: float) -> None:
        """Add an already measured duration to a module."""
        record = self._registry.get(module)
        if record is not None:
            record.elapsed += seconds

    @contextmanager
    def block(self, module: str, test_name: str, line: int = 0) -> Iterator[bool]:
        """Guard a block body; yields the begin_test() decision.

        Any exception leaving the body is recorded as a failure and
        re-raised.
        """
        execute = self.begin_test(module, test_name, line)
        try:
            yield execute
        except BaseException:
            if execute:
                self.end_test(module, Outcome.FAILED)
            raise

    def snapshot(self) -> AggregateCounters:
        return self._registry.snapshot(self.known_modules, self.excluded_modules)

    def report(self, elapsed: float = 0.0) -> ReportModel:
        """Build the read-only report for the run."""
        return build_report(
            registry=self._registry,
            spec=self.spec,
            mode=self.mode,
            known_modules=self.known_modules,
            excluded_modules=self.excluded_modules,
            elapsed=elapsed,
        )
