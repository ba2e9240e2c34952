# topmark:header:start
#
#   project      : cmfront
#   file         : resultdb.py
#   file_relpath : src/cmfront/core/resultdb.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Incremental lit test selection from the ResultDB snapshot.

``llvm-lit --resultdb-output <binary>/lit.json`` writes a JSON document of the shape:

```json
{"tests": [{"expected": false, "testId": "LLVM :: CodeGen/X86/foo.ll"}, ...]}
```

Records with ``expected == false`` are the failing tests. Their identifiers are
mapped back to source paths by an ordered table of translation rules: the first rule
whose pattern matches rewrites the first match and the result is taken relative to
the source directory. Identifiers no rule recognizes are used unchanged, as literal
paths; lit will complain about them if they are not.

The snapshot is only ever read here; writing it is left to lit itself.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cmfront.config.logging import CmLogger, get_logger
from cmfront.core.diagnostics import Diagnostic, DiagnosticLevel
from cmfront.core.errors import ResultDBUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

logger: CmLogger = get_logger(__name__)


@dataclass(frozen=True)
class TestRecord:
    """One test outcome from the snapshot."""

    __test__ = False  # not a pytest test class

    test_id: str
    expected: bool


@dataclass(frozen=True)
class TranslationRule:
    """A (pattern, replacement) pair mapping a lit test id to a source path."""

    pattern: re.Pattern[str]
    replacement: str

    def matches(self, test_id: str) -> bool:
        """Return True if the pattern occurs in ``test_id``."""
        return self.pattern.search(test_id) is not None

    def apply(self, test_id: str) -> str:
        """Replace the first match of the pattern literally."""
        return self.pattern.sub(lambda _m: self.replacement, test_id, count=1)


# Ordered: first match wins.
RAW_TRANSLATION_RULES: tuple[tuple[str, str], ...] = (
    (r"LLVM :: ", "test/"),
    (r"LLVM-Unit :: .*", "test/Unit"),
    (r"LLVM :: ", "test/"),
    (r"LLVM-Unit :: .*", "test/Unit"),
    (r"Clang :: ", "../clang/test/"),
    (r"Clang-Unit :: .*", "../clang/test/Unit"),
    (r"Flang :: ", "../flang/test/"),
    (r"flang-OldUnit :: .*", "../flang/test/NonGtestUnit"),
    (r"flang-Unit :: .*", "../flang/test/Unit"),
    (r"lld :: ", "../lld/test/"),
    (r"lldb :: ", "../lldb/test/"),
    (r"lldb-shell :: .*", "../lldb/test/Shell"),
    (r"lldb-unit :: .*", "../lldb/test/Unit"),
    (r"lldb-api :: .*", "../lldb/test/API"),
    (r"MLIR :: ", "../mlir/test/"),
    (r"MLIR-Unit .*:: ", "../mlir/test/Unit"),
    (r"libomptarget :: [^:]* :: ", "../openmp/libomptarget/test/"),
    (r"ompt-test :: ", "../openmp/libompd/test/"),
    (r"libomp :: ", "../openmp/runtime/test/"),
    (r"OMPT multiplex :: ", "../openmp/tools/multiplex/tests/"),
    (r"libarcher :: ", "../openmp/tools/archer/tests/"),
    (r"Polly :: ", "../polly/test/"),
    (r"Polly-Unit :: .*", "../polly/test/Unit"),
    (r"Polly - isl unit tests :: .*", "../polly/test/UnitIsl"),
)


def build_rules(
    raw: Iterable[tuple[str, str]],
) -> tuple[tuple[TranslationRule, ...], tuple[tuple[str, str], ...]]:
    """Compile ``raw`` into rules, dropping repeated (pattern, replacement) pairs.

    A repeated pair can never match (its first occurrence always wins first), so it is
    dropped and reported instead.

    Returns:
        tuple[tuple[TranslationRule, ...], tuple[tuple[str, str], ...]]: The distinct
            rules in order, and the duplicates that were dropped.
    """
    seen: set[tuple[str, str]] = set()
    rules: list[TranslationRule] = []
    duplicates: list[tuple[str, str]] = []
    for pair in raw:
        if pair in seen:
            duplicates.append(pair)
            continue
        seen.add(pair)
        rules.append(TranslationRule(re.compile(pair[0]), pair[1]))
    return tuple(rules), tuple(duplicates)


TRANSLATION_RULES, DUPLICATE_TRANSLATION_RULES = build_rules(RAW_TRANSLATION_RULES)


def translate_test_id(
    test_id: str,
    source: Path,
    rules: Sequence[TranslationRule] = TRANSLATION_RULES,
) -> str:
    """Map a lit test id to the path to pass to lit."""
    for rule in rules:
        if rule.matches(test_id):
            return str(source / rule.apply(test_id))
    logger.debug("no translation rule for %r, using it as a path", test_id)
    return test_id


def _parse_records(data: Any) -> tuple[TestRecord, ...]:
    if not isinstance(data, dict) or not isinstance(data.get("tests"), list):
        raise ValueError("expected an object with a 'tests' array")
    records: list[TestRecord] = []
    for item in data["tests"]:
        if not isinstance(item, dict):
            raise ValueError("test records must be objects")
        expected = item.get("expected")
        test_id = item.get("testId")
        if not isinstance(expected, bool) or not isinstance(test_id, str):
            raise ValueError("test records need a boolean 'expected' and a string 'testId'")
        records.append(TestRecord(test_id=test_id, expected=expected))
    return tuple(records)


@dataclass(frozen=True)
class ResultDB:
    """A read-only snapshot of the last lit run."""

    path: Path
    tests: tuple[TestRecord, ...] = field(default_factory=tuple)

    @classmethod
    def load(cls, path: Path) -> ResultDB:
        """Read and validate the snapshot at ``path``.

        Raises:
            ResultDBUnavailableError: If the file is missing, unreadable or malformed.
        """
        try:
            with path.open(encoding="utf-8") as fh:
                data = json.load(fh)
            records = _parse_records(data)
        except (OSError, ValueError) as exc:
            raise ResultDBUnavailableError(f"cannot use {path}: {exc}") from exc
        logger.debug("loaded %d test records from %s", len(records), path)
        return cls(path=path, tests=records)

    def failing(self, *, first_only: bool = False) -> list[TestRecord]:
        """Return the failing records in file order (at most one with ``first_only``)."""
        out = [t for t in self.tests if not t.expected]
        return out[:1] if first_only else out


@dataclass
class TestSelection:
    """Selected test paths plus any non-fatal diagnostics."""

    __test__ = False  # not a pytest test class

    tests: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def select_tests(
    explicit_tests: Sequence[str],
    *,
    first_only: bool,
    resultdb_path: Path,
    source: Path,
) -> TestSelection:
    """Decide which tests to run.

    Explicit tests are returned unchanged without reading the snapshot. Otherwise the
    failing tests of the snapshot are translated to paths. An unusable snapshot is
    not fatal: it yields no tests and a warning diagnostic.
    """
    if explicit_tests:
        return TestSelection(tests=list(explicit_tests))
    try:
        db = ResultDB.load(resultdb_path)
    except ResultDBUnavailableError as exc:
        return TestSelection(
            diagnostics=[
                Diagnostic(DiagnosticLevel.WARNING, f"ignoring {resultdb_path.name}: {exc.message}")
            ]
        )
    return TestSelection(
        tests=[translate_test_id(t.test_id, source) for t in db.failing(first_only=first_only)]
    )


def default_update_resultdb(explicit_tests: Sequence[str], *, first_only: bool) -> bool:
    """Return whether lit should rewrite the snapshot when the user did not say.

    Re-running a subset must not be mistaken for a full pass that clears the other
    tracked failures.
    """
    return not explicit_tests and not first_only
