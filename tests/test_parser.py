import os
from pathlib import Path

import pytest

from sut.selection import (
    ConfigNotFoundError,
    ConfigReadError,
    SelectionKind,
    config_paths_from_env,
    load_selection,
    parse_selection_line,
    parse_selection_lines,
)


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_prefixes_map_to_kinds() -> None:
    assert parse_selection_line("utb:add").kind is SelectionKind.TEST_INCLUDE
    assert parse_selection_line("xutb:add").kind is SelectionKind.TEST_EXCLUDE
    assert parse_selection_line("utm:app.math").kind is SelectionKind.MODULE_INCLUDE
    assert parse_selection_line("xutm:app.math").kind is SelectionKind.MODULE_EXCLUDE


def test_value_may_follow_a_space_and_is_trimmed() -> None:
    entry = parse_selection_line("  utb:   add  ")

    assert entry is not None
    assert entry.value == "add"


def test_blank_value_is_dropped() -> None:
    assert parse_selection_line("utb:") is None
    assert parse_selection_line("xutm:   ") is None

    spec = parse_selection_lines(["utb:", "utm: "])
    assert spec.is_empty
    assert not spec.has_unknowns


def test_prefix_is_case_sensitive() -> None:
    spec = parse_selection_lines(["UTB:add", "Utm:mod"], source="sel.txt")

    assert spec.is_empty
    assert [u.line for u in spec.unknown] == ["UTB:add", "Utm:mod"]
    assert {u.source for u in spec.unknown} == {"sel.txt"}


def test_blank_lines_and_duplicates_collapse() -> None:
    spec = parse_selection_lines([
        "",
        "utb:add",
        "   ",
        "utb:add",
        "utb: add",
        "bogus",
        "bogus",
    ])

    assert spec.included_tests == frozenset({"add"})
    assert len(spec.unknown) == 1


def test_load_merges_files_by_union(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.txt", "utb:add\nutm:app.math\nnot a selection\n")
    second = _write(tmp_path / "b.txt", "utb:add\nxutb:sub\nxutm:app.slow\n")

    spec = load_selection([first, second])

    assert spec.included_tests == frozenset({"add"})
    assert spec.excluded_tests == frozenset({"sub"})
    assert spec.included_modules == frozenset({"app.math"})
    assert spec.excluded_modules == frozenset({"app.slow"})
    assert len(spec.unknown) == 1
    assert spec.unknown[0].source == str(first)


def test_load_without_paths_is_empty() -> None:
    spec = load_selection([])

    assert spec.is_empty


def test_missing_file_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_selection([tmp_path / "missing.txt"])

    assert isinstance(excinfo.value, FileNotFoundError)
    assert "missing.txt" in str(excinfo.value)


def test_unreadable_path_raises_read_failed(tmp_path: Path) -> None:
    directory = tmp_path / "selection.d"
    directory.mkdir()

    with pytest.raises(ConfigReadError):
        load_selection([directory])


def test_undecodable_file_raises_read_failed(tmp_path: Path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa utb:add")

    with pytest.raises(ConfigReadError):
        load_selection([path])


def test_config_paths_from_env() -> None:
    environ = {"SUT_CONFIG": os.pathsep.join(["a.txt", " ", "b.txt"])}

    assert config_paths_from_env(environ) == ["a.txt", "b.txt"]
    assert config_paths_from_env({}) == []
