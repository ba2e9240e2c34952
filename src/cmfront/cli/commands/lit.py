# topmark:header:start
#
#   project      : cmfront
#   file         : lit.py
#   file_relpath : src/cmfront/cli/commands/lit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""cmfront `lit` command.

Runs ``llvm-lit`` incrementally. Unless told otherwise, lit writes a ResultDB file
(``lit.json``) in the binary directory, and a run without explicit tests re-runs
exactly the tests that failed last time. Repeating the command therefore whittles
the failing set down until it is empty.

``--update-resultdb`` defaults to on unless a subset is selected (``--first`` or
explicit TESTS), so focusing on one failure never clears the others.

Arguments for lit itself go after a mandatory ``--`` so that TESTS need no
separator.
"""

from __future__ import annotations

import click
from click.core import ParameterSource

from cmfront.cli.cmd_common import run_request
from cmfront.cli.options import CmCommand, forward_args, global_options, options_from_specs
from cmfront.core.keys import CliCmd
from cmfront.core.planner import LitRequest
from cmfront.core.schema import LIT_OPTIONS


def _check_selection(*, group: str | None, first: bool, tests: tuple[str, ...]) -> None:
    """Reject more than one of ``--group``, ``--first`` and TESTS."""
    given = [
        name
        for name, present in (
            ("--group", group is not None),
            ("--first", first),
            ("TESTS", bool(tests)),
        )
        if present
    ]
    if len(given) > 1:
        raise click.UsageError(f"{' and '.join(given)} cannot be used together")


@click.command(
    name=CliCmd.LIT,
    cls=CmCommand,
    forward_after_separator=True,
    help=(
        "llvm-lit (alias: l). Runs TESTS, or the failing tests recorded in the ResultDB. "
        "Arguments after -- are forwarded to llvm-lit."
    ),
)
@global_options
@options_from_specs(LIT_OPTIONS)
@click.argument("tests", nargs=-1)
@click.pass_context
def lit_command(
    ctx: click.Context,
    *,
    print_only: bool,
    xfail_export: bool,
    update_resultdb: bool,
    group: str | None,
    first: bool,
    verbose: bool,
    tests: tuple[str, ...],
) -> None:
    """Plan and run lit."""
    _check_selection(group=group, first=first, tests=tests)
    explicit_update = ctx.get_parameter_source("update_resultdb") is not ParameterSource.DEFAULT
    request = LitRequest(
        print_only=print_only,
        xfail_export=xfail_export,
        update_resultdb=update_resultdb if explicit_update else None,
        group=group,
        first=first,
        verbose=verbose,
        tests=tests,
        args=forward_args(ctx),
    )
    run_request(ctx, request)
