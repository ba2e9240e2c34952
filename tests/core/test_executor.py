# topmark:header:start
#
#   project      : cmfront
#   file         : test_executor.py
#   file_relpath : tests/core/test_executor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for plan execution (real subprocesses, POSIX shell required)."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import pytest

from cmfront.core.commands import CommandSpec
from cmfront.core.errors import CommandFailedError, ExecutionError
from cmfront.core.exit_codes import ExitCode
from cmfront.core.executor import execute_plan, run_command
from tests.conftest import mark_integration

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")


def sh(script: str) -> CommandSpec:
    return CommandSpec("sh", ("-c", script))


def test_dry_run_echoes_without_running(tmp_path: Path) -> None:
    marker = tmp_path / "ran"
    lines: list[str] = []
    execute_plan([sh(f"touch {marker}"), CommandSpec("false")], dry_run=True, echo=lines.append)
    assert lines == [f"sh -c 'touch {marker}'", "false"]
    assert not marker.exists()


@mark_integration
def test_commands_run_in_order_with_env(tmp_path: Path) -> None:
    out = tmp_path / "out"
    plan = [
        sh(f'echo "first $CM_X" >> {out}').with_env("CM_X", "a b"),
        sh(f"echo second >> {out}"),
    ]
    execute_plan(plan, dry_run=False, echo=print)
    assert out.read_text(encoding="utf-8") == "first a b\nsecond\n"


@mark_integration
def test_first_failure_stops_the_plan(tmp_path: Path) -> None:
    marker = tmp_path / "ran"
    with pytest.raises(CommandFailedError) as excinfo:
        execute_plan([sh("exit 3"), sh(f"touch {marker}")], dry_run=False, echo=print)
    assert excinfo.value.returncode == 3
    assert excinfo.value.exit_code == 3
    assert not marker.exists()


@mark_integration
def test_signal_death_has_no_exit_code() -> None:
    with pytest.raises(CommandFailedError) as excinfo:
        run_command(sh("kill -TERM $$"))
    assert excinfo.value.returncode is None
    assert excinfo.value.exit_code == ExitCode.UNKNOWN_CHILD_STATUS


@mark_integration
def test_missing_program_is_an_execution_error(tmp_path: Path) -> None:
    with pytest.raises(ExecutionError):
        run_command(CommandSpec(str(tmp_path / "no-such-program")))


@mark_integration
def test_base_environment_is_respected(tmp_path: Path) -> None:
    out = tmp_path / "out"
    run_command(
        sh(f'echo "$ONLY_HERE" > {out}'),
        environ={"PATH": "/usr/bin:/bin", "ONLY_HERE": "yes"},
    )
    assert out.read_text(encoding="utf-8") == "yes\n"
