# topmark:header:start
#
#   project      : cmfront
#   file         : test_activate.py
#   file_relpath : tests/cli/test_activate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for ``cm activate`` and ``cm deactivate``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cmfront.core.planner import ACTIVATE_TEMPLATE, DEACTIVATE_TEMPLATE
from tests.cli.conftest import assert_SUCCESS, planned, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_activate_exports_resolved_globals(cmake_project: Path) -> None:
    result = run_cli(["-#", "-s", "src dir", "-c", "minsizerel", "a", "-b", "out"])
    assert_SUCCESS(result)
    assert planned(result) == [
        [
            "printf",
            ACTIVATE_TEMPLATE,
            f"'{cmake_project / 'src dir'}'",
            str(cmake_project / "out"),
            "MinSizeRel",
        ]
    ]


@mark_cli
def test_activate_reads_environment(llvm_checkout: Path) -> None:
    result = run_cli(["-#", "activate"], env={"CM_BIN": "/tmp/b", "CM_CFG": "Debug"})
    assert_SUCCESS(result)
    assert planned(result)[0][2:] == [str(llvm_checkout / "llvm"), "/tmp/b", "Debug"]


@mark_cli
def test_deactivate(cmake_project: Path) -> None:
    result = run_cli(["-#", "deactivate"])
    assert_SUCCESS(result)
    assert planned(result) == [["printf", DEACTIVATE_TEMPLATE]]
