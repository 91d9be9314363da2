"""Block executor - runs unit test blocks through the selective engine.

Coordinates a sequential run:
1. Announce mode and selections
2. For each block: ask the engine, run the body, record failures
3. Build the report
4. Print the summary
5. Save the JSON report (optional)

Blocks are supplied by the host; nothing here discovers them.
"""

import time
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..reporting.json_reporter import JsonReporter
from ..reporting.report import ReportModel
from ..selection.schema import SelectionSpec, describe
from .decider import ExecutionMode
from .engine import Outcome, SelectiveEngine

LABEL = "[unittest]"
REPORT_FILENAME = "sut_report.json"


@dataclass
class TestBlock:
    """A named unit test block supplied by the host."""
    __test__ = False

    module: str
    name: str
    func: Callable[[], None]
    line: int = 0


@dataclass
class BlockFailure:
    """A block whose body raised."""
    module: str
    name: str
    line: int
    message: str
    trace: str = ""


@dataclass
class ExecutionConfig:
    """Configuration for a run."""
    selective: bool = True
    save_report: bool = False
    report_dir: Optional[Path] = None
    verbose: bool = True


@dataclass
class ExecutionResult:
    """Complete result of a run."""
    report: ReportModel
    failures: list[BlockFailure] = field(default_factory=list)
    report_path: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.report.success

    def to_flow_json(self) -> dict:
        """Convert to flow CLI compatible JSON output."""
        reporter = JsonReporter()
        data = reporter.generate(self.report, self.failures)
        return reporter.generate_flow_output(data, self.report_path)


class BlockExecutor:
    """Runs unit test blocks one at a time through a SelectiveEngine."""

    def __init__(
        self,
        spec: Optional[SelectionSpec] = None,
        config: Optional[ExecutionConfig] = None,
        known_modules: Iterable[str] = (),
    ):
        """Initialize block executor.

        Args:
            spec: Merged selection spec (None = run everything).
            config: Execution configuration.
            known_modules: All module names known to the host.
        """
        self.config = config or ExecutionConfig()
        self.engine = SelectiveEngine(
            spec=spec,
            selective=self.config.selective,
            known_modules=known_modules,
        )
        self._reporter = JsonReporter()

    def execute(self, blocks: Iterable[TestBlock]) -> ExecutionResult:
        """Run every block in order.

        Returns:
            ExecutionResult with the report and collected failures.
        """
        start_time = time.time()
        failures: list[BlockFailure] = []

        self._print_intro()

        for block in blocks:
            failure = self._run_block(block)
            if failure is not None:
                failures.append(failure)
                self._print_failure(failure)

        report = self.engine.report(elapsed=time.time() - start_time)
        result = ExecutionResult(report=report, failures=failures)

        self._print_summary(report)

        if self.config.save_report:
            result.report_path = self._save_report(result)

        return result

    def _run_block(self, block: TestBlock) -> Optional[BlockFailure]:
        """Run a single block; returns the failure if its body raised."""
        if not self.engine.begin_test(block.module, block.name, block.line):
            return None

        self._print_block_info(block)
        started = time.time()
        try:
            block.func()
        except Exception as e:
            self.engine.end_test(block.module, Outcome.FAILED)
            return BlockFailure(
                module=block.module,
                name=block.name,
                line=block.line,
                message=str(e) or type(e).__name__,
                trace=traceback.format_exc(),
            )
        else:
            self.engine.end_test(block.module, Outcome.PASSED)
        finally:
            self.engine.add_elapsed(block.module, time.time() - started)

        return None

    def _print(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    def _print_intro(self) -> None:
        mode = self.engine.mode
        self._print(f"{LABEL} Mode: {mode.value}")
        if mode is not ExecutionMode.SELECTION:
            return

        spec = self.engine.spec
        self._print(f"{LABEL} Selections: {describe(spec)}")
        for entry in spec.entries():
            self._print(f"{LABEL}   {entry}")
        for item in spec.unknown:
            self._print(f"{LABEL}   x: {item.line} ({item.source})")

    def _print_block_info(self, block: TestBlock) -> None:
        self._print(f"{LABEL} {block.module} {block.line:4d} {block.name}")

    def _print_failure(self, failure: BlockFailure) -> None:
        self._print(f"{LABEL} Assertion Failed!")
        self._print(f"  Message: {failure.message}")
        self._print(f"  Module:  {failure.module} ({failure.line})")
        self._print(f"  Block:   {failure.name}")

    def _print_summary(self, report: ReportModel) -> None:
        """Print per-module lines and the run summary."""
        for item in report.modules:
            marker = "" if item.uses_hook else " *"
            self._print(
                f"{LABEL} {item.name}{marker} - {item.passing} passed, "
                f"{item.failing} failed, {item.found} found - {item.elapsed:.3f}s"
            )

        aggregate = report.aggregate
        self._print_category("Module(s) with unit test", aggregate.modules_with_tests)
        self._print_category("Module(s) without unit test", aggregate.modules_without_tests)
        self._print_category("Module(s) excluded", aggregate.modules_excluded)

        self._print(
            f"{LABEL} Summary: {aggregate.found} found: "
            f"{aggregate.passing} passed, {aggregate.failing} failed"
        )
        self._print(f"{LABEL} Elapsed: {report.elapsed:.3f}s")

    def _print_category(self, label: str, names: list[str]) -> None:
        self._print(f"{LABEL} {label} ({len(names)})")
        for name in sorted(names):
            self._print(f"{LABEL}     {name}")

    def _save_report(self, result: ExecutionResult) -> Optional[str]:
        """Save run report to file."""
        try:
            report_dir = self.config.report_dir or Path(".")
            data = self._reporter.generate(result.report, result.failures)
            saved_path = self._reporter.save(data, Path(report_dir) / REPORT_FILENAME)
            self._print(f"Report saved: {saved_path}")
            return str(saved_path)

        except OSError as e:
            print(f"Warning: Failed to save report: {e}")
            return None
