# topmark:header:start
#
#   project      : cmfront
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ``cm`` through Click's test runner.

Planned command lines are checked in dry-run mode (``-#``). `planned` splits the
printed lines back into argument vectors with `shlex`, which is exactly what a shell
would do when re-executing them.
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from cmfront.cli.main import cli
from cmfront.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def run_cli(argv: Sequence[str], *, env: Mapping[str, str | None] | None = None) -> Result:
    """Invoke the ``cm`` group in the current working directory.

    Args:
        argv (Sequence[str]): Arguments after the program name.
        env (Mapping[str, str | None] | None): Environment overrides for the run
            (None removes a variable).

    Returns:
        Result: The `click.testing.Result` of the run.
    """
    runner = CliRunner()
    return runner.invoke(cli, list(argv), env=env, prog_name="cm")


def planned(result: Result) -> list[list[str]]:
    """Return the dry-run command lines of ``result`` as argument vectors."""
    return [shlex.split(line) for line in result.stdout.splitlines() if line.strip()]


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that Click rejected the command line (code 2)."""
    assert result.exit_code == 2, result.output


def assert_exit_code(result: Result, code: int) -> None:
    """Assert a specific exit code."""
    assert result.exit_code == code, result.output
