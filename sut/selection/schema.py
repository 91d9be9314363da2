"""Selection data models for selective unit testing.

Defines the immutable selection specification built from configuration
files, plus the diagnostics produced while validating it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


class SelectionKind(str, Enum):
    """Supported selection entry kinds."""
    MODULE_INCLUDE = "utm:"
    MODULE_EXCLUDE = "xutm:"
    TEST_INCLUDE = "utb:"
    TEST_EXCLUDE = "xutb:"

    @property
    def prefix(self) -> str:
        return self.value


# Longest prefixes first so "xutb:" is never read as something shorter.
PREFIXES = sorted(SelectionKind, key=lambda k: len(k.prefix), reverse=True)


class ConfigError(Exception):
    """Base error for selection configuration loading."""


class ConfigNotFoundError(ConfigError, FileNotFoundError):
    """A configuration path does not exist."""


class ConfigReadError(ConfigError, OSError):
    """A configuration path exists but could not be read."""


@dataclass(frozen=True)
class SelectionEntry:
    """A single include/exclude entry."""
    kind: SelectionKind
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError(f"Blank value for selection entry '{self.kind.prefix}'")

    def __str__(self) -> str:
        return f"{self.kind.prefix}{self.value}"


@dataclass(frozen=True)
class UnknownEntry:
    """An unrecognized configuration line and the file it came from."""
    line: str
    source: str


@dataclass(frozen=True)
class SelectionSpec:
    """Merged include/exclude sets for one run.

    Built once at startup and never mutated afterwards.
    """
    included_modules: frozenset[str] = frozenset()
    excluded_modules: frozenset[str] = frozenset()
    included_tests: frozenset[str] = frozenset()
    excluded_tests: frozenset[str] = frozenset()
    unknown: tuple[UnknownEntry, ...] = ()

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[SelectionEntry],
        unknown: Iterable[UnknownEntry] = (),
    ) -> "SelectionSpec":
        """Build a spec from parsed entries (duplicates collapse)."""
        buckets: dict[SelectionKind, set[str]] = {kind: set() for kind in SelectionKind}
        for entry in entries:
            buckets[entry.kind].add(entry.value)

        return cls(
            included_modules=frozenset(buckets[SelectionKind.MODULE_INCLUDE]),
            excluded_modules=frozenset(buckets[SelectionKind.MODULE_EXCLUDE]),
            included_tests=frozenset(buckets[SelectionKind.TEST_INCLUDE]),
            excluded_tests=frozenset(buckets[SelectionKind.TEST_EXCLUDE]),
            unknown=_unique(unknown),
        )

    def merge(self, other: "SelectionSpec") -> "SelectionSpec":
        """Return the set union of this spec and another."""
        return SelectionSpec(
            included_modules=self.included_modules | other.included_modules,
            excluded_modules=self.excluded_modules | other.excluded_modules,
            included_tests=self.included_tests | other.included_tests,
            excluded_tests=self.excluded_tests | other.excluded_tests,
            unknown=_unique(self.unknown + other.unknown),
        )

    @property
    def is_empty(self) -> bool:
        """True when no include/exclude entries exist (unknowns don't count)."""
        return not (
            self.included_modules
            or self.excluded_modules
            or self.included_tests
            or self.excluded_tests
        )

    @property
    def has_unknowns(self) -> bool:
        return len(self.unknown) > 0

    @property
    def has_inclusions(self) -> bool:
        return bool(self.included_modules or self.included_tests)

    def entries(self) -> list[SelectionEntry]:
        """All entries, grouped by kind and sorted by value."""
        groups = (
            (SelectionKind.MODULE_INCLUDE, self.included_modules),
            (SelectionKind.MODULE_EXCLUDE, self.excluded_modules),
            (SelectionKind.TEST_INCLUDE, self.included_tests),
            (SelectionKind.TEST_EXCLUDE, self.excluded_tests),
        )
        return [
            SelectionEntry(kind=kind, value=value)
            for kind, values in groups
            for value in sorted(values)
        ]

    def to_dict(self) -> dict:
        """Convert to a dictionary for serialization."""
        return {
            "modules": sorted(self.included_modules),
            "excluded_modules": sorted(self.excluded_modules),
            "unittests": sorted(self.included_tests),
            "excluded_unittests": sorted(self.excluded_tests),
            "unknown": [
                {"line": u.line, "source": u.source} for u in self.unknown
            ],
        }


def _unique(items: Iterable[UnknownEntry]) -> tuple[UnknownEntry, ...]:
    """Drop duplicate unknown entries, keeping first-seen order."""
    return tuple(dict.fromkeys(items))


@dataclass
class ValidationError:
    """A single validation diagnostic."""
    path: str
    message: str


@dataclass
class ValidationResult:
    """Result of selection validation; findings are warnings only."""
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.warnings:
            return f"Valid ({self.warning_count} warnings)"
        return "Valid"


def describe(spec: Optional[SelectionSpec]) -> str:
    """One-line description of a spec for progress output."""
    if spec is None or spec.is_empty:
        return "no selections"
    parts = []
    if spec.included_modules:
        parts.append(f"{len(spec.included_modules)} module(s)")
    if spec.included_tests:
        parts.append(f"{len(spec.included_tests)} block(s)")
    excluded = len(spec.excluded_modules) + len(spec.excluded_tests)
    if excluded:
        parts.append(f"{excluded} exclusion(s)")
    return ", ".join(parts)
