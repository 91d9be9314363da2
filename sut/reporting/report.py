"""Report model handed to renderers at the end of a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from ..runner.counter import AggregateCounters, Registry
    from ..runner.decider import ExecutionMode
    from ..selection.schema import SelectionSpec


@dataclass(frozen=True)
class ModuleLineItem:
    """Summary line for one module."""
    name: str
    passing: int
    failing: int
    found: int
    elapsed: float
    uses_hook: bool = True

    @property
    def skipped(self) -> int:
        return self.found - self.passing - self.failing


@dataclass(frozen=True)
class ReportModel:
    """Read-only snapshot of a finished run."""
    mode: ExecutionMode
    selections: SelectionSpec
    modules: tuple[ModuleLineItem, ...]
    aggregate: AggregateCounters
    elapsed: float

    @property
    def all_passing(self) -> bool:
        return self.aggregate.all_passing

    @property
    def none_failing(self) -> bool:
        return self.aggregate.none_failing

    @property
    def success(self) -> bool:
        return self.aggregate.none_failing

    def module(self, name: str) -> ModuleLineItem | None:
        for item in self.modules:
            if item.name == name:
                return item
        return None


def build_report(
    registry: Registry,
    spec: SelectionSpec,
    mode: ExecutionMode,
    known_modules: Iterable[str] = (),
    excluded_modules: Optional[Iterable[str]] = None,
    elapsed: float = 0.0,
) -> ReportModel:
    """Assemble a ReportModel from the registry.

    Args:
        registry: Module records of the run.
        spec: Selection spec the run used.
        mode: Execution mode of the run.
        known_modules: All module names known to the host.
        excluded_modules: Excluded modules to list; defaults to the spec's.
        elapsed: Total elapsed seconds, measured by the caller.

    Returns:
        ReportModel snapshot.
    """
    if excluded_modules is None:
        excluded_modules = spec.excluded_modules

    items = tuple(
        ModuleLineItem(
            name=r.name,
            passing=r.passing,
            failing=r.failing,
            found=r.found,
            elapsed=r.elapsed,
            uses_hook=r.uses_hook,
        )
        for r in registry.records()
    )

    return ReportModel(
        mode=mode,
        selections=spec,
        modules=items,
        aggregate=registry.snapshot(known_modules, excluded_modules),
        elapsed=elapsed,
    )
