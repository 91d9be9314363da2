"""Unit test counters.

Tracks found/passing/failing counts per module and across the run.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass
class ModuleRecord:
    """Counters for a single module."""
    name: str
    found: int = 0
    passing: int = 0
    failing: int = 0
    uses_hook: bool = False
    elapsed: float = 0.0  # seconds, as measured by the harness

    def add_found(self) -> None:
        self.found += 1

    def add_passing(self) -> None:
        self.passing += 1

    def add_failing(self) -> None:
        """Turn one optimistic pass into a failure.

        Does nothing when no pass was counted.
        """
        if self.passing > 0:
            self.passing -= 1
            self.failing += 1

    @property
    def skipped(self) -> int:
        return self.found - self.passing - self.failing

    @property
    def all_passing(self) -> bool:
        return self.passing == self.found

    @property
    def none_failing(self) -> bool:
        return self.failing == 0


@dataclass
class AggregateCounters:
    """Run-wide counters and categorized module lists."""
    found: int = 0
    passing: int = 0
    failing: int = 0
    modules_with_tests: list[str] = field(default_factory=list)
    modules_without_tests: list[str] = field(default_factory=list)
    modules_excluded: list[str] = field(default_factory=list)
    modules_without_hook: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.found - self.passing - self.failing

    @property
    def all_passing(self) -> bool:
        return self.passing == self.found

    @property
    def none_failing(self) -> bool:
        return self.failing == 0


class Registry:
    """Per-run module records, kept in first-seen order."""

    def __init__(self):
        self._records: dict[str, ModuleRecord] = {}

    def get_or_create(self, name: str) -> ModuleRecord:
        """Get the record for a module, creating it on first use."""
        record = self._records.get(name)
        if record is None:
            record = ModuleRecord(name=name)
            self._records[name] = record
        return record

    def get(self, name: str) -> Optional[ModuleRecord]:
        return self._records.get(name)

    def records(self) -> list[ModuleRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: str) -> bool:
        return name in self._records

    def snapshot(
        self,
        known_modules: Iterable[str] = (),
        excluded_modules: Iterable[str] = (),
    ) -> AggregateCounters:
        """Sum all records and categorize module names.

        Args:
            known_modules: Every module name the host knows about.
            excluded_modules: Excluded modules from the selection spec.

        Returns:
            AggregateCounters for the run so far.
        """
        records = self.records()
        with_tests = [r.name for r in records if r.found > 0]
        excluded = sorted(set(excluded_modules))
        skip = set(with_tests) | set(excluded)

        return AggregateCounters(
            found=sum(r.found for r in records),
            passing=sum(r.passing for r in records),
            failing=sum(r.failing for r in records),
            modules_with_tests=with_tests,
            modules_without_tests=sorted(set(known_modules) - skip),
            modules_excluded=excluded,
            modules_without_hook=[
                r.name for r in records if r.found > 0 and not r.uses_hook
            ],
        )
