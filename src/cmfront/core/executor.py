# topmark:header:start
#
#   project      : cmfront
#   file         : executor.py
#   file_relpath : src/cmfront/core/executor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run or dry-print a plan.

Commands run strictly in order; the first unsuccessful one aborts the rest of the
plan with [`CommandFailedError`][cmfront.core.errors.CommandFailedError], carrying the
child's exit code. Children inherit stdio and the signal dispositions of this process.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING

from cmfront.config.logging import CmLogger, get_logger
from cmfront.core.errors import CommandFailedError, ExecutionError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from cmfront.core.commands import CommandSpec

logger: CmLogger = get_logger(__name__)


def run_command(command: CommandSpec, environ: Mapping[str, str] | None = None) -> None:
    """Run one command to completion.

    Raises:
        ExecutionError: If the program cannot be started.
        CommandFailedError: If it exits unsuccessfully. A child killed by a signal
            has no exit code.
    """
    env = dict(os.environ if environ is None else environ)
    env.update(command.env)
    logger.info("running: %s", command.render())
    try:
        completed = subprocess.run(command.argv, env=env, check=False)
    except OSError as exc:
        raise ExecutionError(f"failed to run {command.program!r}: {exc}") from exc
    if completed.returncode != 0:
        code = completed.returncode if completed.returncode > 0 else None
        raise CommandFailedError(code)


def execute_plan(
    commands: Sequence[CommandSpec],
    *,
    dry_run: bool,
    echo: Callable[[str], None],
    environ: Mapping[str, str] | None = None,
) -> None:
    """Execute ``commands`` in order, or print each one when ``dry_run`` is set.

    Args:
        commands (Sequence[CommandSpec]): The plan.
        dry_run (bool): Print shell-quoted lines instead of running.
        echo (Callable[[str], None]): Line sink for dry-run output.
        environ (Mapping[str, str] | None): Base environment for children.
    """
    for command in commands:
        if dry_run:
            echo(command.render())
        else:
            run_command(command, environ)
