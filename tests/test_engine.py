import pytest

from sut.runner import ExecutionMode, Outcome, SelectiveEngine
from sut.selection import parse_selection_lines


def _engine(*lines: str, **kwargs) -> SelectiveEngine:
    return SelectiveEngine(parse_selection_lines(lines), **kwargs)


def test_empty_selection_counts_everything_as_passing() -> None:
    engine = _engine()

    assert engine.begin_test("m1", "a", 10)
    assert engine.begin_test("m1", "b", 20)
    assert engine.begin_test("m2", "c", 5)

    totals = engine.snapshot()
    assert engine.mode is ExecutionMode.ALL
    assert (totals.found, totals.passing, totals.failing) == (3, 3, 0)
    assert engine.registry.get("m1").found == 2
    assert engine.registry.get("m2").found == 1
    assert totals.modules_with_tests == ["m1", "m2"]


def test_selected_block_end_to_end() -> None:
    engine = _engine("utb:add")

    assert engine.begin_test("mod1", "add") is True
    assert engine.begin_test("mod1", "sub") is False
    assert engine.begin_test("mod2", "mul") is False

    totals = engine.snapshot()
    assert engine.mode is ExecutionMode.SELECTION
    assert totals.found == 3
    assert totals.passing == 1
    assert totals.failing == 0
    assert engine.registry.get("mod1").passing == 1
    assert engine.registry.get("mod2").passing == 0
    assert engine.registry.get("mod2").skipped == 1


def test_failure_moves_passing_to_failing() -> None:
    engine = _engine()

    assert engine.begin_test("m", "x")
    engine.end_test("m", Outcome.FAILED)

    record = engine.registry.get("m")
    totals = engine.snapshot()
    assert (record.found, record.passing, record.failing) == (1, 0, 1)
    assert (totals.found, totals.passing, totals.failing) == (1, 0, 1)


def test_passed_outcome_changes_nothing() -> None:
    engine = _engine()
    engine.begin_test("m", "x")

    engine.end_test("m", Outcome.PASSED)
    engine.end_test("m", "passed")

    record = engine.registry.get("m")
    assert (record.found, record.passing, record.failing) == (1, 1, 0)


def test_found_counts_every_attempt() -> None:
    engine = _engine("xutb:x")

    for _ in range(3):
        assert not engine.begin_test("m", "x")

    record = engine.registry.get("m")
    assert record.found == 3
    assert record.passing + record.failing == 0


def test_failure_after_skip_changes_nothing() -> None:
    engine = _engine("xutb:x")
    assert not engine.begin_test("m", "x")

    engine.end_test("m", Outcome.FAILED)
    engine.end_test("m", Outcome.FAILED)

    record = engine.registry.get("m")
    assert (record.found, record.passing, record.failing) == (1, 0, 0)
    assert engine.report().success


def test_outcome_for_unseen_module_creates_no_record() -> None:
    engine = _engine()

    engine.end_test("other", Outcome.FAILED)
    engine.add_elapsed("other", 1.0)

    assert "other" not in engine.registry
    assert engine.report().modules == ()


def test_unrecognized_outcome_is_ignored() -> None:
    engine = _engine()
    engine.begin_test("m", "x")

    engine.end_test("m", "flaky")
    engine.end_test("m", None)
    engine.end_test("m", "failed")

    record = engine.registry.get("m")
    assert (record.passing, record.failing) == (0, 1)


def test_non_selective_engine_ignores_selection() -> None:
    engine = _engine("utb:add", selective=False)

    assert engine.mode is ExecutionMode.ALL
    assert engine.begin_test("m", "sub")
    assert engine.snapshot().passing == 1


def test_non_selective_engine_lists_no_exclusions() -> None:
    engine = _engine("xutm:M", "xutm:E", selective=False, known_modules=["M", "N", "E"])

    assert engine.begin_test("M", "a")

    totals = engine.snapshot()
    report = engine.report()
    assert totals.modules_with_tests == ["M"]
    assert totals.modules_excluded == []
    assert totals.modules_without_tests == ["E", "N"]
    assert report.aggregate.modules_excluded == []
    assert report.aggregate.modules_without_tests == ["E", "N"]


def test_begin_test_marks_module_as_hooked() -> None:
    engine = _engine()
    engine.begin_test("hooked", "a")
    engine.count_unhooked("legacy")

    totals = engine.snapshot()
    assert engine.registry.get("hooked").uses_hook
    assert not engine.registry.get("legacy").uses_hook
    assert totals.modules_without_hook == ["legacy"]
    assert totals.found == 2
    assert totals.passing == 2


def test_module_lists() -> None:
    engine = _engine("xutm:app.excluded", known_modules=[
        "app.math", "app.empty", "app.excluded", "app.empty",
    ])
    engine.begin_test("app.math", "add")

    totals = engine.snapshot()
    assert totals.modules_with_tests == ["app.math"]
    assert totals.modules_without_tests == ["app.empty"]
    assert totals.modules_excluded == ["app.excluded"]


def test_excluded_modules_listed_without_any_event() -> None:
    engine = _engine("xutm:never.seen")

    assert engine.snapshot().modules_excluded == ["never.seen"]


def test_records_keep_first_seen_order() -> None:
    engine = _engine()
    for module in ["b", "a", "c", "a"]:
        engine.begin_test(module, "t")

    assert [r.name for r in engine.registry.records()] == ["b", "a", "c"]


def test_block_context_records_failure_and_reraises() -> None:
    engine = _engine()

    with pytest.raises(AssertionError):
        with engine.block("m", "x") as execute:
            assert execute
            assert 1 == 2

    record = engine.registry.get("m")
    assert (record.passing, record.failing) == (0, 1)


def test_block_context_skipped_body() -> None:
    engine = _engine("utb:add")
    ran = []

    with engine.block("m", "sub") as execute:
        if execute:
            ran.append("sub")

    assert ran == []
    assert engine.registry.get("m").found == 1


def test_elapsed_is_recorded_as_given() -> None:
    engine = _engine()
    engine.begin_test("m", "x")
    engine.add_elapsed("m", 0.5)
    engine.add_elapsed("m", -0.25)

    assert engine.registry.get("m").elapsed == pytest.approx(0.25)


def test_report_model() -> None:
    engine = _engine("utb:add", known_modules=["mod1", "mod2", "mod3"])
    engine.begin_test("mod1", "add")
    engine.begin_test("mod2", "sub")
    engine.add_elapsed("mod1", 0.1)

    report = engine.report(elapsed=1.5)

    assert report.mode is ExecutionMode.SELECTION
    assert report.selections.included_tests == frozenset({"add"})
    assert [m.name for m in report.modules] == ["mod1", "mod2"]
    assert report.module("mod1").passing == 1
    assert report.module("mod2").skipped == 1
    assert report.module("missing") is None
    assert report.aggregate.modules_without_tests == ["mod3"]
    assert report.elapsed == 1.5
    assert report.success
    assert not report.all_passing
