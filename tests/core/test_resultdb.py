# topmark:header:start
#
#   project      : cmfront
#   file         : test_resultdb.py
#   file_relpath : tests/core/test_resultdb.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ResultDB loading, test selection and test id translation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cmfront.core.diagnostics import DiagnosticLevel
from cmfront.core.errors import ResultDBUnavailableError
from cmfront.core.resultdb import (
    DUPLICATE_TRANSLATION_RULES,
    RAW_TRANSLATION_RULES,
    TRANSLATION_RULES,
    ResultDB,
    TestRecord,
    build_rules,
    default_update_resultdb,
    select_tests,
    translate_test_id,
)
from tests.conftest import parametrize

SOURCE = Path("/src/llvm")

RECORDS = [
    {"expected": False, "testId": "LLVM :: a.c"},
    {"expected": True, "testId": "LLVM :: b.c"},
    {"expected": False, "testId": "LLVM :: c.c"},
]


def write_db(path: Path, records: list[dict[str, object]]) -> Path:
    path.write_text(json.dumps({"tests": records}), encoding="utf-8")
    return path


def test_failing_tests_in_file_order(tmp_path: Path) -> None:
    db = write_db(tmp_path / "lit.json", RECORDS)
    selection = select_tests((), first_only=False, resultdb_path=db, source=SOURCE)
    assert selection.tests == [str(SOURCE / "test/a.c"), str(SOURCE / "test/c.c")]
    assert selection.diagnostics == []


def test_first_only_truncates(tmp_path: Path) -> None:
    db = write_db(tmp_path / "lit.json", RECORDS)
    selection = select_tests((), first_only=True, resultdb_path=db, source=SOURCE)
    assert selection.tests == [str(SOURCE / "test/a.c")]


def test_explicit_tests_skip_the_snapshot(tmp_path: Path) -> None:
    selection = select_tests(
        ("x.ll", "y.ll"), first_only=False, resultdb_path=tmp_path / "missing.json", source=SOURCE
    )
    assert selection.tests == ["x.ll", "y.ll"]
    assert selection.diagnostics == []


@parametrize("content", [None, "not json", '{"tests": 3}', '{"tests": [{"expected": "no"}]}'])
def test_unusable_snapshot_degrades_to_warning(tmp_path: Path, content: str | None) -> None:
    db = tmp_path / "lit.json"
    if content is not None:
        db.write_text(content, encoding="utf-8")
    selection = select_tests((), first_only=False, resultdb_path=db, source=SOURCE)
    assert selection.tests == []
    assert [d.level for d in selection.diagnostics] == [DiagnosticLevel.WARNING]
    assert "lit.json" in selection.diagnostics[0].message


def test_load_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ResultDBUnavailableError):
        ResultDB.load(tmp_path / "lit.json")


def test_load_keeps_all_records(tmp_path: Path) -> None:
    db = ResultDB.load(write_db(tmp_path / "lit.json", RECORDS))
    assert db.tests[1] == TestRecord(test_id="LLVM :: b.c", expected=True)
    assert [t.test_id for t in db.failing()] == ["LLVM :: a.c", "LLVM :: c.c"]


@parametrize(
    "test_id, relative",
    [
        ("LLVM :: CodeGen/X86/foo.ll", "test/CodeGen/X86/foo.ll"),
        ("LLVM-Unit :: Support/./SupportTests/Path.Foo", "test/Unit"),
        ("Clang :: Sema/a.cpp", "../clang/test/Sema/a.cpp"),
        ("flang-OldUnit :: x", "../flang/test/NonGtestUnit"),
        ("lldb-api :: python_api/foo/TestFoo.py", "../lldb/test/API"),
        (
            "libomptarget :: x86_64-unknown-linux-gnu :: offloading/a.c",
            "../openmp/libomptarget/test/offloading/a.c",
        ),
        ("OMPT multiplex :: a.c", "../openmp/tools/multiplex/tests/a.c"),
        ("Polly - isl unit tests :: x", "../polly/test/UnitIsl"),
    ],
)
def test_translation_rules(test_id: str, relative: str) -> None:
    assert translate_test_id(test_id, SOURCE) == str(SOURCE / relative)


def test_unknown_test_ids_are_used_verbatim() -> None:
    assert translate_test_id("some/local/test.ll", SOURCE) == "some/local/test.ll"


def test_duplicate_rules_are_flagged_and_dropped() -> None:
    assert DUPLICATE_TRANSLATION_RULES == (
        (r"LLVM :: ", "test/"),
        (r"LLVM-Unit :: .*", "test/Unit"),
    )
    assert len(TRANSLATION_RULES) == len(RAW_TRANSLATION_RULES) - 2
    patterns = [rule.pattern.pattern for rule in TRANSLATION_RULES]
    assert len(patterns) == len(set(patterns))


def test_build_rules_preserves_order() -> None:
    rules, duplicates = build_rules([("b", "2"), ("a", "1"), ("b", "2")])
    assert [(r.pattern.pattern, r.replacement) for r in rules] == [("b", "2"), ("a", "1")]
    assert duplicates == (("b", "2"),)


@parametrize(
    "tests, first, expected",
    [((), False, True), (("a",), False, False), ((), True, False), (("a",), True, False)],
)
def test_default_update_resultdb(tests: tuple[str, ...], first: bool, expected: bool) -> None:
    assert default_update_resultdb(tests, first_only=first) is expected
