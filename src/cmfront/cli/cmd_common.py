# topmark:header:start
#
#   project      : cmfront
#   file         : cmd_common.py
#   file_relpath : src/cmfront/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by every subcommand: turning the
global options in ``ctx.obj`` into a planning context, and planning plus executing
a request.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import click

from cmfront.cli.console import ClickConsole, ConsoleLike
from cmfront.config.logging import CmLogger, get_logger
from cmfront.constants import DEFAULT_BUILD_TYPE
from cmfront.core import planner
from cmfront.core.executor import execute_plan
from cmfront.core.keys import ArgKey
from cmfront.core.probes import SubprocessProbes
from cmfront.core.quirks import ResolvedPaths, detect_quirks

if TYPE_CHECKING:
    from cmfront.core.probes import FeatureProbes

logger: CmLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the context, creating a plain one if missing."""
    obj = ctx.ensure_object(dict)
    console = obj.get(ArgKey.CONSOLE)
    if console is None:
        console = ClickConsole(enable_color=False)
        obj[ArgKey.CONSOLE] = console
    return console


def build_plan_context(ctx: click.Context) -> planner.PlanContext:
    """Resolve quirks, paths and build type from the global options in ``ctx.obj``.

    Quirks detection only runs when no mode was given explicitly.
    """
    obj = ctx.ensure_object(dict)
    source = obj.get(ArgKey.SOURCE)
    quirks = obj.get(ArgKey.QUIRKS) or detect_quirks(source)
    paths = ResolvedPaths.resolve(source=source, binary=obj.get(ArgKey.BINARY), quirks=quirks)
    context = planner.PlanContext(
        paths=paths,
        quirks=quirks,
        config=obj.get(ArgKey.CONFIG) or DEFAULT_BUILD_TYPE,
    )
    logger.debug("plan context: %s", context)
    return context


def run_request(
    ctx: click.Context,
    request: planner.PlanRequest,
    *,
    probes: FeatureProbes | None = None,
) -> None:
    """Plan ``request`` and run (or, with ``--dry-run``, print) the resulting commands.

    Raises:
        CmError: Any planning or execution failure; Click reports it and exits with
            the error's exit code.
    """
    console = get_console(ctx)
    color = bool(ctx.obj.get(ArgKey.COLOR_ENABLED, False))
    result = planner.plan(
        request,
        build_plan_context(ctx),
        probes if probes is not None else SubprocessProbes(),
        os.environ,
    )
    for diag in result.diagnostics:
        console.warn(diag.render(color=color))
    execute_plan(
        result.commands,
        dry_run=bool(ctx.obj.get(ArgKey.DRY_RUN, False)),
        echo=console.print,
    )
